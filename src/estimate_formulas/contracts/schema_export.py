"""
Schema Export — генерация JSON Schema контракта из реестра операций

Контракт описывает конверт вызова:
    {"operation": "<name>", "arguments": {"<param>": <value>, ...}}

Одна запись $defs на каждую перегрузку (ключ OperationSpec.key).
Числа допускаются как десятичные строки или JSON numbers: представление
выбирается развёртыванием, контракт нейтрален к нему.

Схема — артефакт сборки: результат export_interface_schema() хранится в
contracts/schema/calculation_utils.json и загружается SchemaLoader.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from estimate_formulas.contracts.operations import OPERATIONS, OperationSpec, ValueKind

logger = logging.getLogger(__name__)

SCHEMA_NAME = "calculation_utils"
SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

# Десятичная строка: знак, цифры, дробная часть, экспонента
DECIMAL_STRING_PATTERN = r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$"


def _value_schemas() -> Dict[str, Any]:
    return {
        "numeric": {
            "oneOf": [
                {"type": "string", "pattern": DECIMAL_STRING_PATTERN},
                {"type": "number"},
            ]
        },
        "optionalNumeric": {
            "oneOf": [
                {"$ref": "#/$defs/numeric"},
                {"type": "null"},
            ]
        },
    }


def _operation_schema(op: OperationSpec) -> Dict[str, Any]:
    properties = {
        p.name: {"$ref": "#/$defs/optionalNumeric" if p.optional else "#/$defs/numeric"}
        for p in op.parameters
    }
    required = [p.name for p in op.parameters if not p.optional]

    return {
        "type": "object",
        "description": f"{op.name}({', '.join(op.parameter_names)}) -> {op.returns.value}",
        "properties": {
            "operation": {"const": op.name},
            "arguments": {
                "type": "object",
                "properties": properties,
                "required": required,
                "additionalProperties": False,
            },
        },
        "required": ["operation", "arguments"],
        "additionalProperties": False,
    }


def build_interface_schema() -> Dict[str, Any]:
    """
    Построение JSON Schema (Draft 2020-12) контракта CalculationUtils.

    Returns:
        Схема как dict: anyOf по всем перегрузкам (перегрузки nearlyEquals
        пересекаются, поэтому anyOf, а не oneOf)
    """
    defs = _value_schemas()
    for op in OPERATIONS:
        defs[op.key] = _operation_schema(op)

    return {
        "$schema": SCHEMA_DIALECT,
        "title": "CalculationUtils",
        "description": "Call envelope for the estimate formula operations",
        "anyOf": [{"$ref": f"#/$defs/{op.key}"} for op in OPERATIONS],
        "$defs": defs,
    }


def export_interface_schema(path: Union[str, Path]) -> Path:
    """
    Запись контракта в файл.

    Args:
        path: Файл или директория (тогда имя calculation_utils.json)

    Returns:
        Путь записанного файла
    """
    target = Path(path)
    if target.is_dir():
        target = target / f"{SCHEMA_NAME}.json"

    with open(target, "w", encoding="utf-8") as f:
        json.dump(build_interface_schema(), f, indent=2)
        f.write("\n")

    logger.info("Interface schema with %d operations written to %s", len(OPERATIONS), target)
    return target

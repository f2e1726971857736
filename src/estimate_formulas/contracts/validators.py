"""
JSON Schema Contract Validators

Модуль для валидации конвертов вызова CalculationUtils согласно
JSON Schema контракту. Использует библиотеку jsonschema.

Схемы:
- calculation_utils.json (генерируется schema_export из реестра операций)
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from estimate_formulas.contracts.schema_export import SCHEMA_NAME


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию ищет схемы в contracts/schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Union[str, Path]] = None):
        self._schema_dir = Path(schema_dir) if schema_dir else Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'calculation_utils')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class CalculationCallValidator(ContractValidator):
    """Валидатор конверта вызова CalculationUtils."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(SCHEMA_NAME, loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_calculation_call(data: Dict[str, Any]) -> None:
    """
    Валидация конверта вызова.

    Args:
        data: {"operation": ..., "arguments": {...}}

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CalculationCallValidator().validate(data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "CalculationCallValidator",
    "ValidationError",
    "validate_calculation_call",
]

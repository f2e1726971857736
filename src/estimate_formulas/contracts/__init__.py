"""
Contract Module

Реестр операций CalculationUtils, генерация и валидация JSON Schema контракта.
"""

from .operations import (
    OPERATIONS,
    OperationSpec,
    ParameterSpec,
    ValueKind,
    find_overloads,
    operation_names,
)
from .schema_export import (
    SCHEMA_NAME,
    build_interface_schema,
    export_interface_schema,
)
from .validators import (
    CalculationCallValidator,
    ContractValidator,
    SchemaLoader,
    validate_calculation_call,
)

__all__ = [
    # Registry
    "OPERATIONS",
    "OperationSpec",
    "ParameterSpec",
    "ValueKind",
    "find_overloads",
    "operation_names",
    # Schema export
    "SCHEMA_NAME",
    "build_interface_schema",
    "export_interface_schema",
    # Validators
    "SchemaLoader",
    "ContractValidator",
    "CalculationCallValidator",
    "validate_calculation_call",
]

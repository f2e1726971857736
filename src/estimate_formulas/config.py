"""
Конфигурация развёртывания CalculationUtils

Формульные константы (epsilon, округление, fallback markup) фиксированы в
модулях math и не настраиваются. Настраивается только граница: какое
числовое представление принимает развёртывание и проверять ли контракт.
"""

from enum import Enum

from pydantic import BaseModel, Field


class NumericRepresentation(str, Enum):
    """Представление чисел на границе хоста."""

    DECIMAL_STRING = "decimal_string"  # десятичные строки, без дрейфа float
    FLOAT = "float"  # нативные float


class CalculationConfig(BaseModel):
    """
    Конфигурация CalculationUtils.

    Immutable модель (frozen=True): одно развёртывание — одно представление.
    """

    representation: NumericRepresentation = Field(
        default=NumericRepresentation.DECIMAL_STRING,
        description="Числовое представление аргументов и результатов",
    )
    validate_contract: bool = Field(
        default=True,
        description="Проверять конверт вызова по JSON Schema контракту",
    )

    model_config = {"frozen": True}

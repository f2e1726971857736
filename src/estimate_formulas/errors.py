"""
Исключения estimate_formulas

Формулы не бросают исключений на нулевых или отрицательных базах.
Ошибки возникают только на границе: некорректное число или неизвестная операция.
"""

from typing import Any


class ParseError(ValueError):
    """
    Некорректное числовое значение на границе маршалинга.

    Attributes:
        parameter: Имя параметра операции
        value: Исходное (неразобранное) значение
        reason: Причина отказа
    """

    def __init__(self, parameter: str, value: Any, reason: str):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse {parameter}={value!r}: {reason}")


class UnknownOperationError(LookupError):
    """Операция отсутствует в реестре контракта."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unknown operation: {operation!r}")

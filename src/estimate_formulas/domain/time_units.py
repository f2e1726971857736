"""
TimeUnits — конверсия единиц рабочего времени

Единственный допустимый способ преобразований между:
- minutes (минуты)
- hours (часы, дробные)

Округление не применяется: деление на ненулевую константу не требует защиты.
"""

from decimal import Decimal
from typing import Final

from estimate_formulas.math.numerical_safeguards import Numeric, to_decimal

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

MINUTES_IN_HOUR: Final[Decimal] = Decimal(60)


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def convert_minutes_to_hours(minutes: Numeric) -> Decimal:
    """
    Конверсия: минуты → часы

    Examples:
        >>> convert_minutes_to_hours(90)
        Decimal('1.5')
    """
    return to_decimal(minutes, "minutes") / MINUTES_IN_HOUR


def convert_hours_to_minutes(hours: Numeric) -> Decimal:
    """
    Конверсия: часы → минуты

    Examples:
        >>> convert_hours_to_minutes(Decimal("1.5"))
        Decimal('90.0')
    """
    return to_decimal(hours, "hours") * MINUTES_IN_HOUR

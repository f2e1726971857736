"""
Numerical Safeguards — примитивы денежной арифметики

Модуль содержит примитивы, на которых построены все формулы сметы:
- Безопасное деление с fallback вместо исключения при делении на ноль
- Сравнение с абсолютной толерантностью (обычное и для optional значений)
- Конверсия amount ↔ percent относительно базовой стоимости
- Единая политика округления денежных сумм

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не бросает исключение (возвращается fallback)
2. Любой amount — результат round_amount (2 знака, ROUND_HALF_EVEN)
3. amount = round(percent × cost, 2), percent = amount / cost
   (пара согласована с точностью до шага округления)
4. Все операции детерминированы: внутреннее представление — Decimal
"""

import logging
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from typing import Final, Optional, Union

from estimate_formulas.errors import ParseError

logger = logging.getLogger(__name__)

Numeric = Union[Decimal, int, str]

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность для nearly_equals
EPS_NEARLY_EQUALS: Final[Decimal] = Decimal("0.0001")

# Количество знаков после запятой для денежных сумм
AMOUNT_DECIMAL_PLACES: Final[int] = 2

# Шаг квантования денежных сумм (0.01)
AMOUNT_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES)

# Правило округления: banker's rounding (half to even),
# как у decimal.Round по умолчанию на исходной платформе
AMOUNT_ROUNDING: Final[str] = ROUND_HALF_EVEN

# Значение safe_divide при делении на ноль, если fallback не передан
DEFAULT_DIVIDE_FALLBACK: Final[Decimal] = Decimal(0)

# Наибольшее по модулю значение, принимаемое на границе хоста
MAX_ABS_VALUE: Final[Decimal] = Decimal("79228162514264337593543950335")


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: Numeric, name: str = "value") -> Decimal:
    """
    Приведение числа к Decimal.

    float сознательно не принимается: конверсия float → Decimal выполняется
    на границе (FloatCodec), чтобы не смешивать представления внутри формул.

    Args:
        value: Decimal, int или десятичная строка
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечное Decimal значение

    Raises:
        ParseError: Если значение не число, NaN или Infinity
    """
    if isinstance(value, bool):
        raise ParseError(name, value, "booleans are not numeric")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ParseError(name, value, "not a decimal number") from None
    else:
        raise ParseError(name, value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise ParseError(name, value, "value must be finite")

    return result


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: Numeric,
    denominator: Numeric,
    fallback: Optional[Numeric] = None,
) -> Decimal:
    """
    Безопасное деление без исключения при нулевом знаменателе.

    Нулевая база — ожидаемый вход (например, у проекта ещё нет direct cost),
    поэтому деление на ноль разрешается через fallback, а не через ошибку.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при denominator == 0 (default: 0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(10, 2)
        Decimal('5')
        >>> safe_divide(10, 0)
        Decimal('0')
        >>> safe_divide(10, 0, fallback=5)
        Decimal('5')
    """
    denom = to_decimal(denominator, "denominator")

    if denom == 0:
        result = DEFAULT_DIVIDE_FALLBACK if fallback is None else to_decimal(fallback, "fallback")
        logger.debug("Division by zero resolved by fallback %s", result)
        return result

    return to_decimal(numerator, "numerator") / denom


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def nearly_equals(first: Numeric, second: Numeric) -> bool:
    """
    Сравнение двух значений с абсолютной толерантностью.

    Алгоритм: abs(first - second) < EPS_NEARLY_EQUALS (строгое неравенство)

    Examples:
        >>> nearly_equals(Decimal("1.00001"), Decimal("1.00005"))
        True
        >>> nearly_equals(Decimal("1.0"), Decimal("1.001"))
        False
    """
    diff = to_decimal(first, "first") - to_decimal(second, "second")
    return abs(diff) < EPS_NEARLY_EQUALS


def nearly_equals_optional(first: Optional[Numeric], second: Optional[Numeric]) -> bool:
    """
    Сравнение двух optional значений.

    "Отсутствует" (None) — отдельное состояние, не равное нулю:
    - присутствует ровно одно значение → False
    - оба отсутствуют → True
    - оба присутствуют → nearly_equals

    Examples:
        >>> nearly_equals_optional(None, None)
        True
        >>> nearly_equals_optional(5, None)
        False
    """
    if (first is None) != (second is None):
        return False

    if first is None:
        return True

    return nearly_equals(first, second)


# =============================================================================
# ОКРУГЛЕНИЕ И AMOUNT ↔ PERCENT
# =============================================================================


def round_amount(value: Numeric) -> Decimal:
    """
    Округление денежной суммы до центов по единой политике.

    Суммы округляются до 2 знаков, потому что пользователь видит только
    центы: сумма округлённых итогов совпадает с тем, что показано в UI.

    Examples:
        >>> round_amount(Decimal("12.345"))
        Decimal('12.34')
        >>> round_amount(Decimal("12.355"))
        Decimal('12.36')
    """
    decimal_value = to_decimal(value)

    # quantize требует точности на все цифры целой части плюс центы
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, decimal_value.adjusted() + AMOUNT_DECIMAL_PLACES + 2)
        result = decimal_value.quantize(AMOUNT_QUANTUM, rounding=AMOUNT_ROUNDING)

    # -0.00 → 0.00
    return result.copy_abs() if result.is_zero() else result


def get_percent_from_amount(amount: Numeric, cost: Numeric) -> Decimal:
    """
    Percent из amount относительно cost.

    Формула: percent = amount / cost (через safe_divide)

    Args:
        amount: Сумма
        cost: Базовая стоимость

    Returns:
        Доля (безразмерная); 0 если cost == 0
    """
    return safe_divide(amount, cost)


def get_amount_from_percent(percent: Numeric, cost: Numeric) -> Decimal:
    """
    Amount из percent относительно cost.

    Формула: amount = round(percent × cost, 2)

    Args:
        percent: Доля (например, 0.05 для 5%)
        cost: Базовая стоимость

    Returns:
        Сумма, округлённая до центов

    Examples:
        >>> get_amount_from_percent(Decimal("0.1"), 100)
        Decimal('10.00')
    """
    return round_amount(to_decimal(percent, "percent") * to_decimal(cost, "cost"))

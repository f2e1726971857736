"""
Cost Stages — формулы отдельных надбавок сметы

Каждая надбавка задаётся парой формул над своей базой:
- прямая: percent → amount = round(percent × base, 2)
- обратная: amount → percent = amount / base (через safe_divide)

БАЗЫ:
    contingency:         direct_cost
    escalation:          direct_cost + contingency_amount
    aggregated fee:      direct_cost + contingency_amount
    markup:              direct_cost + contingency_amount + aggregated_fee_amount
    gross margin:        sell_price = total_direct_cost + gross_margin_amount

Gross margin считается от sell price, а не от стоимости, поэтому его amount
получается обратным решением: sell_price = tdc / (1 - gm), amount = sell_price - tdc.

Markup и gross margin связаны тождеством:
    markup = gm / (1 - gm)

Промежуточные суммы (contingency, aggregated fee) считаются теми же
округляющими примитивами, поэтому цепочка воспроизводит то, что видит
пользователь. Отрицательные входы (кредиты) не отвергаются.

ИЗВЕСТНЫЙ ПРОБЕЛ: compound escalation (эффективный процент по сроку)
не реализован до уточнения формулы.
"""

import logging
from decimal import Decimal
from typing import Final

from estimate_formulas.math.numerical_safeguards import (
    Numeric,
    get_amount_from_percent,
    get_percent_from_amount,
    round_amount,
    safe_divide,
    to_decimal,
)

logger = logging.getLogger(__name__)

# Markup при gross margin = 100% (бесконечный markup ограничивается единицей).
# Это соглашение продукта, а не следствие арифметики.
MARKUP_PERCENT_FALLBACK: Final[Decimal] = Decimal(1)


# =============================================================================
# CONTINGENCY
# =============================================================================


def calculate_contingency_percent(direct_cost: Numeric, contingency_amount: Numeric) -> Decimal:
    """Contingency percent = contingency_amount / direct_cost."""
    return get_percent_from_amount(
        amount=to_decimal(contingency_amount, "contingency_amount"),
        cost=to_decimal(direct_cost, "direct_cost"),
    )


def calculate_contingency_amount(direct_cost: Numeric, contingency_percent: Numeric) -> Decimal:
    """Contingency amount = round(contingency_percent × direct_cost, 2)."""
    return get_amount_from_percent(
        percent=to_decimal(contingency_percent, "contingency_percent"),
        cost=to_decimal(direct_cost, "direct_cost"),
    )


# =============================================================================
# ESCALATION
# =============================================================================


def calculate_escalation_percent(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    escalation_amount: Numeric,
) -> Decimal:
    """
    Escalation percent относительно direct_cost + contingency_amount.

    Args:
        direct_cost: Прямая стоимость
        contingency_amount: Сумма contingency (уже округлённая)
        escalation_amount: Сумма escalation

    Returns:
        Escalation percent; 0 если база равна нулю

    Raises:
        ParseError: Если аргумент не число
    """
    direct_cost = to_decimal(direct_cost, "direct_cost")
    contingency_amount = to_decimal(contingency_amount, "contingency_amount")
    escalation_amount = to_decimal(escalation_amount, "escalation_amount")

    return get_percent_from_amount(
        amount=escalation_amount,
        cost=direct_cost + contingency_amount,
    )


def calculate_escalation_amount(
    direct_cost: Numeric,
    contingency_percent: Numeric,
    escalation_percent: Numeric,
) -> Decimal:
    """
    Escalation amount над базой direct_cost + contingency_amount.

    contingency_amount выводится из contingency_percent тем же округлением,
    что и в calculate_contingency_amount.
    """
    direct_cost = to_decimal(direct_cost, "direct_cost")
    contingency_amount = calculate_contingency_amount(
        direct_cost=direct_cost,
        contingency_percent=contingency_percent,
    )
    return get_amount_from_percent(
        percent=to_decimal(escalation_percent, "escalation_percent"),
        cost=direct_cost + contingency_amount,
    )


# =============================================================================
# AGGREGATED FEE (WEFS)
# =============================================================================


def calculate_aggregated_fee_percent(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    aggregated_fee_amount: Numeric,
) -> Decimal:
    """Aggregated fee (WEFS) percent относительно direct_cost + contingency_amount."""
    direct_cost = to_decimal(direct_cost, "direct_cost")
    contingency_amount = to_decimal(contingency_amount, "contingency_amount")
    aggregated_fee_amount = to_decimal(aggregated_fee_amount, "aggregated_fee_amount")

    return get_percent_from_amount(
        amount=aggregated_fee_amount,
        cost=direct_cost + contingency_amount,
    )


def calculate_aggregated_fee_amount(
    direct_cost: Numeric,
    contingency_percent: Numeric,
    aggregated_fee_percent: Numeric,
) -> Decimal:
    """Aggregated fee (WEFS) amount над базой direct_cost + contingency_amount."""
    direct_cost = to_decimal(direct_cost, "direct_cost")
    contingency_amount = calculate_contingency_amount(
        direct_cost=direct_cost,
        contingency_percent=contingency_percent,
    )
    return get_amount_from_percent(
        percent=to_decimal(aggregated_fee_percent, "aggregated_fee_percent"),
        cost=direct_cost + contingency_amount,
    )


def _total_direct_cost_from_percents(
    direct_cost: Decimal,
    contingency_percent: Decimal,
    aggregated_fee_percent: Decimal,
) -> Decimal:
    # direct_cost + contingency_amount + aggregated_fee_amount, суммы округлены
    contingency_amount = calculate_contingency_amount(
        direct_cost=direct_cost,
        contingency_percent=contingency_percent,
    )
    aggregated_fee_amount = calculate_aggregated_fee_amount(
        direct_cost=direct_cost,
        contingency_percent=contingency_percent,
        aggregated_fee_percent=aggregated_fee_percent,
    )
    return direct_cost + contingency_amount + aggregated_fee_amount


# =============================================================================
# MARKUP
# =============================================================================


def calculate_markup_percent(gross_margin_percent: Numeric) -> Decimal:
    """
    Markup percent из gross margin percent.

    Gross margin — доля от sell price, markup — доля от стоимости:
        markup = gm / (1 - gm)

    При gm == 1 знаменатель равен нулю и возвращается MARKUP_PERCENT_FALLBACK.

    Examples:
        >>> calculate_markup_percent(Decimal("0.2"))
        Decimal('0.25')
        >>> calculate_markup_percent(Decimal("1.0"))
        Decimal('1')
    """
    gross_margin_percent = to_decimal(gross_margin_percent, "gross_margin_percent")
    denominator = 1 - gross_margin_percent
    if denominator == 0:
        logger.debug(
            "Gross margin percent %s leaves no cost share, markup clamped to %s",
            gross_margin_percent,
            MARKUP_PERCENT_FALLBACK,
        )

    return safe_divide(gross_margin_percent, denominator, fallback=MARKUP_PERCENT_FALLBACK)


def calculate_markup_amount(
    direct_cost: Numeric,
    contingency_percent: Numeric,
    aggregated_fee_percent: Numeric,
    markup_percent: Numeric,
) -> Decimal:
    """
    Markup amount над total direct cost.

    База: direct_cost + contingency_amount + aggregated_fee_amount,
    где обе суммы выводятся из своих процентов.

    Args:
        direct_cost: Прямая стоимость
        contingency_percent: Contingency percent
        aggregated_fee_percent: Aggregated fee (WEFS) percent
        markup_percent: Markup percent

    Returns:
        Markup amount, округлённый до центов
    """
    total_direct_cost = _total_direct_cost_from_percents(
        direct_cost=to_decimal(direct_cost, "direct_cost"),
        contingency_percent=to_decimal(contingency_percent, "contingency_percent"),
        aggregated_fee_percent=to_decimal(aggregated_fee_percent, "aggregated_fee_percent"),
    )
    return get_amount_from_percent(
        percent=to_decimal(markup_percent, "markup_percent"),
        cost=total_direct_cost,
    )


# =============================================================================
# GROSS MARGIN
# =============================================================================


def calculate_gross_margin_percent(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    aggregated_fee_amount: Numeric,
    gross_margin_amount: Numeric,
) -> Decimal:
    """
    Gross margin percent как доля sell price.

    Формула:
        total_direct_cost = direct_cost + contingency_amount + aggregated_fee_amount
        sell_price = total_direct_cost + gross_margin_amount
        gm = gross_margin_amount / sell_price
    """
    direct_cost = to_decimal(direct_cost, "direct_cost")
    contingency_amount = to_decimal(contingency_amount, "contingency_amount")
    aggregated_fee_amount = to_decimal(aggregated_fee_amount, "aggregated_fee_amount")
    gross_margin_amount = to_decimal(gross_margin_amount, "gross_margin_amount")

    total_direct_cost = direct_cost + contingency_amount + aggregated_fee_amount
    sell_price = total_direct_cost + gross_margin_amount

    return get_percent_from_amount(amount=gross_margin_amount, cost=sell_price)


def calculate_gross_margin_amount(
    direct_cost: Numeric,
    contingency_percent: Numeric,
    aggregated_fee_percent: Numeric,
    gross_margin_percent: Numeric,
) -> Decimal:
    """
    Gross margin amount, решённый обратно из доли sell price.

    Единственная формула, которая не сводится к get_amount_from_percent:
    gm = amount / sell_price и sell_price = tdc + amount, откуда
        sell_price = tdc / (1 - gm)
        amount = round(sell_price - tdc, 2)

    При gm == 1 sell_price через safe_divide равен 0 (amount = -tdc).

    Args:
        direct_cost: Прямая стоимость
        contingency_percent: Contingency percent
        aggregated_fee_percent: Aggregated fee (WEFS) percent
        gross_margin_percent: Gross margin percent (доля sell price)

    Returns:
        Gross margin amount, округлённый до центов
    """
    total_direct_cost = _total_direct_cost_from_percents(
        direct_cost=to_decimal(direct_cost, "direct_cost"),
        contingency_percent=to_decimal(contingency_percent, "contingency_percent"),
        aggregated_fee_percent=to_decimal(aggregated_fee_percent, "aggregated_fee_percent"),
    )
    gross_margin_percent = to_decimal(gross_margin_percent, "gross_margin_percent")
    sell_price = safe_divide(total_direct_cost, 1 - gross_margin_percent)

    return round_amount(sell_price - total_direct_cost)

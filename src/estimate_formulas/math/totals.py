"""
Totals — агрегирующие формулы сметы

Total direct cost имеет две точки входа для двух upstream-конвейеров:
- с отдельной стадией escalation (direct + contingency + escalation + material fee)
- без неё (direct + contingency + aggregated fee)

Все слагаемые — уже округлённые суммы, поэтому итог не округляется повторно.
"""

from decimal import Decimal

from estimate_formulas.math.numerical_safeguards import Numeric, to_decimal


def calculate_total_direct_cost_with_escalation(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    escalation_amount: Numeric,
    material_fee_amount: Numeric,
) -> Decimal:
    """Total direct cost для конвейера со стадией escalation."""
    return (
        to_decimal(direct_cost, "direct_cost")
        + to_decimal(contingency_amount, "contingency_amount")
        + to_decimal(escalation_amount, "escalation_amount")
        + to_decimal(material_fee_amount, "material_fee_amount")
    )


def calculate_total_direct_cost_with_fees(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    aggregated_fee_amount: Numeric,
) -> Decimal:
    """Total direct cost для конвейера без стадии escalation."""
    return (
        to_decimal(direct_cost, "direct_cost")
        + to_decimal(contingency_amount, "contingency_amount")
        + to_decimal(aggregated_fee_amount, "aggregated_fee_amount")
    )


def calculate_sell_price(
    direct_cost: Numeric,
    contingency_amount: Numeric,
    escalation_amount: Numeric,
    material_fee_amount: Numeric,
    gross_margin_amount: Numeric,
) -> Decimal:
    """
    Sell price = total direct cost + gross margin amount.

    Args:
        direct_cost: Прямая стоимость
        contingency_amount: Сумма contingency
        escalation_amount: Сумма escalation
        material_fee_amount: Сумма material fee (WEFS)
        gross_margin_amount: Сумма gross margin

    Returns:
        Цена для заказчика (без дополнительного округления)
    """
    total_direct_cost = calculate_total_direct_cost_with_escalation(
        direct_cost=direct_cost,
        contingency_amount=contingency_amount,
        escalation_amount=escalation_amount,
        material_fee_amount=material_fee_amount,
    )
    return total_direct_cost + to_decimal(gross_margin_amount, "gross_margin_amount")

"""
Core math modules для estimate_formulas

Денежные примитивы и формулы надбавок сметы на Decimal.
"""

# Numerical Safeguards
from estimate_formulas.math.numerical_safeguards import (
    # Constants
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_QUANTUM,
    AMOUNT_ROUNDING,
    DEFAULT_DIVIDE_FALLBACK,
    EPS_NEARLY_EQUALS,
    MAX_ABS_VALUE,
    # Conversion
    Numeric,
    to_decimal,
    # Safe division
    safe_divide,
    # Comparisons
    nearly_equals,
    nearly_equals_optional,
    # Amount ↔ percent
    get_amount_from_percent,
    get_percent_from_amount,
    round_amount,
)

# Cost Stages
from estimate_formulas.math.cost_stages import (
    MARKUP_PERCENT_FALLBACK,
    calculate_aggregated_fee_amount,
    calculate_aggregated_fee_percent,
    calculate_contingency_amount,
    calculate_contingency_percent,
    calculate_escalation_amount,
    calculate_escalation_percent,
    calculate_gross_margin_amount,
    calculate_gross_margin_percent,
    calculate_markup_amount,
    calculate_markup_percent,
)

# Totals
from estimate_formulas.math.totals import (
    calculate_sell_price,
    calculate_total_direct_cost_with_escalation,
    calculate_total_direct_cost_with_fees,
)

__all__ = [
    # Numerical Safeguards — Constants
    "AMOUNT_DECIMAL_PLACES",
    "AMOUNT_QUANTUM",
    "AMOUNT_ROUNDING",
    "DEFAULT_DIVIDE_FALLBACK",
    "EPS_NEARLY_EQUALS",
    "MAX_ABS_VALUE",
    # Numerical Safeguards — Conversion
    "Numeric",
    "to_decimal",
    # Numerical Safeguards — Safe division
    "safe_divide",
    # Numerical Safeguards — Comparisons
    "nearly_equals",
    "nearly_equals_optional",
    # Numerical Safeguards — Amount ↔ percent
    "get_amount_from_percent",
    "get_percent_from_amount",
    "round_amount",
    # Cost Stages — Constants
    "MARKUP_PERCENT_FALLBACK",
    # Cost Stages — Functions
    "calculate_aggregated_fee_amount",
    "calculate_aggregated_fee_percent",
    "calculate_contingency_amount",
    "calculate_contingency_percent",
    "calculate_escalation_amount",
    "calculate_escalation_percent",
    "calculate_gross_margin_amount",
    "calculate_gross_margin_percent",
    "calculate_markup_amount",
    "calculate_markup_percent",
    # Totals
    "calculate_sell_price",
    "calculate_total_direct_cost_with_escalation",
    "calculate_total_direct_cost_with_fees",
]

"""
Operation Registry — реестр функциональной поверхности CalculationUtils

Единственный источник истины для имён операций, порядка параметров и
их optionality. Из реестра строится JSON Schema контракт (schema_export)
и через него же CalculationUtils диспетчеризует вызовы по имени.

Перегрузки (nearlyEquals, calculateTotalDirectCost) представлены отдельными
записями с одинаковым name и разным variant.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# ENUMS
# =============================================================================


class ValueKind(str, Enum):
    """Тип значения на границе контракта."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"


# =============================================================================
# SPECS
# =============================================================================


@dataclass(frozen=True)
class ParameterSpec:
    """Параметр операции (camelCase имя контракта)."""

    name: str
    optional: bool = False


@dataclass(frozen=True)
class OperationSpec:
    """Операция контракта."""

    name: str
    method: str  # Имя метода CalculationUtils
    parameters: tuple[ParameterSpec, ...]
    returns: ValueKind = ValueKind.NUMERIC
    variant: Optional[str] = None  # Суффикс перегрузки

    @property
    def key(self) -> str:
        """Уникальный ключ записи (имя + суффикс перегрузки)."""
        return self.name + (self.variant or "")

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    @property
    def required_count(self) -> int:
        return sum(1 for p in self.parameters if not p.optional)


def _params(*names: str) -> tuple[ParameterSpec, ...]:
    return tuple(ParameterSpec(name) for name in names)


# =============================================================================
# REGISTRY
# =============================================================================

OPERATIONS: tuple[OperationSpec, ...] = (
    OperationSpec("convertMinutesToHours", "convert_minutes_to_hours", _params("minutes")),
    OperationSpec("convertHoursToMinutes", "convert_hours_to_minutes", _params("hours")),
    OperationSpec(
        "safeDivide",
        "safe_divide",
        (
            ParameterSpec("firstValue"),
            ParameterSpec("secondValue"),
            ParameterSpec("fallbackValue", optional=True),
        ),
    ),
    OperationSpec(
        "nearlyEquals",
        "nearly_equals",
        _params("firstValue", "secondValue"),
        returns=ValueKind.BOOLEAN,
    ),
    OperationSpec(
        "nearlyEquals",
        "nearly_equals_optional",
        (
            ParameterSpec("firstValue", optional=True),
            ParameterSpec("secondValue", optional=True),
        ),
        returns=ValueKind.BOOLEAN,
        variant="Optional",
    ),
    OperationSpec("getPercentFromAmount", "get_percent_from_amount", _params("amount", "cost")),
    OperationSpec("getAmountFromPercent", "get_amount_from_percent", _params("percent", "cost")),
    OperationSpec(
        "calculateContingencyPercent",
        "calculate_contingency_percent",
        _params("directCost", "contingencyAmount"),
    ),
    OperationSpec(
        "calculateContingencyAmount",
        "calculate_contingency_amount",
        _params("directCost", "contingencyPercent"),
    ),
    OperationSpec(
        "calculateEscalationPercent",
        "calculate_escalation_percent",
        _params("directCost", "contingencyAmount", "escalationAmount"),
    ),
    OperationSpec(
        "calculateEscalationAmount",
        "calculate_escalation_amount",
        _params("directCost", "contingencyPercent", "escalationPercent"),
    ),
    OperationSpec(
        "calculateMarkupPercent",
        "calculate_markup_percent",
        _params("grossMarginPercent"),
    ),
    OperationSpec(
        "calculateMarkupAmount",
        "calculate_markup_amount",
        _params("directCost", "contingencyPercent", "aggregatedFeePercent", "markupPercent"),
    ),
    OperationSpec(
        "calculateGrossMarginPercent",
        "calculate_gross_margin_percent",
        _params("directCost", "contingencyAmount", "aggregatedFeeAmount", "grossMarginAmount"),
    ),
    OperationSpec(
        "calculateGrossMarginAmount",
        "calculate_gross_margin_amount",
        _params("directCost", "contingencyPercent", "aggregatedFeePercent", "grossMarginPercent"),
    ),
    OperationSpec(
        "calculateAggregatedFeePercent",
        "calculate_aggregated_fee_percent",
        _params("directCost", "contingencyAmount", "aggregatedFeeAmount"),
    ),
    OperationSpec(
        "calculateAggregatedFeeAmount",
        "calculate_aggregated_fee_amount",
        _params("directCost", "contingencyPercent", "aggregatedFeePercent"),
    ),
    OperationSpec(
        "calculateTotalDirectCost",
        "calculate_total_direct_cost_with_escalation",
        _params("directCost", "contingencyAmount", "escalationAmount", "materialFeeAmount"),
        variant="WithEscalation",
    ),
    OperationSpec(
        "calculateTotalDirectCost",
        "calculate_total_direct_cost_with_fees",
        _params("directCost", "contingencyAmount", "aggregatedFeeAmount"),
        variant="WithFees",
    ),
    OperationSpec(
        "calculateSellPrice",
        "calculate_sell_price",
        _params(
            "directCost",
            "contingencyAmount",
            "escalationAmount",
            "materialFeeAmount",
            "grossMarginAmount",
        ),
    ),
)


def operation_names() -> tuple[str, ...]:
    """Имена операций контракта без повторов, в порядке реестра."""
    return tuple(dict.fromkeys(op.name for op in OPERATIONS))


def find_overloads(name: str) -> tuple[OperationSpec, ...]:
    """Все записи реестра с данным именем (пусто, если имя неизвестно)."""
    return tuple(op for op in OPERATIONS if op.name == name)

"""
CalculationUtils — фасад формул для хост-рантайма

Экспортирует функциональную поверхность контракта (реестр OPERATIONS)
в одном числовом представлении, выбранном CalculationConfig:
- snake_case методы на каждую операцию
- call(name, *args): вызов по имени контракта с разрешением перегрузок
- call_envelope(...): вызов конвертом {"operation", "arguments"}

Поток вызова:
    конверт → JSON Schema контракт (опционально) → кодек → формула → кодек
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, Field

from estimate_formulas.config import CalculationConfig
from estimate_formulas.contracts import (
    OPERATIONS,
    CalculationCallValidator,
    OperationSpec,
    ValueKind,
    find_overloads,
)
from estimate_formulas.domain import convert_hours_to_minutes, convert_minutes_to_hours
from estimate_formulas.errors import UnknownOperationError
from estimate_formulas.interop.marshalling import NumericCodec, codec_for
from estimate_formulas import math as formulas

logger = logging.getLogger(__name__)


# =============================================================================
# FORMULA BINDINGS
# =============================================================================

_FORMULAS: Dict[str, Callable[..., Any]] = {
    "convert_minutes_to_hours": convert_minutes_to_hours,
    "convert_hours_to_minutes": convert_hours_to_minutes,
    "safe_divide": formulas.safe_divide,
    "nearly_equals": formulas.nearly_equals,
    "nearly_equals_optional": formulas.nearly_equals_optional,
    "get_percent_from_amount": formulas.get_percent_from_amount,
    "get_amount_from_percent": formulas.get_amount_from_percent,
    "calculate_contingency_percent": formulas.calculate_contingency_percent,
    "calculate_contingency_amount": formulas.calculate_contingency_amount,
    "calculate_escalation_percent": formulas.calculate_escalation_percent,
    "calculate_escalation_amount": formulas.calculate_escalation_amount,
    "calculate_markup_percent": formulas.calculate_markup_percent,
    "calculate_markup_amount": formulas.calculate_markup_amount,
    "calculate_gross_margin_percent": formulas.calculate_gross_margin_percent,
    "calculate_gross_margin_amount": formulas.calculate_gross_margin_amount,
    "calculate_aggregated_fee_percent": formulas.calculate_aggregated_fee_percent,
    "calculate_aggregated_fee_amount": formulas.calculate_aggregated_fee_amount,
    "calculate_total_direct_cost_with_escalation": formulas.calculate_total_direct_cost_with_escalation,
    "calculate_total_direct_cost_with_fees": formulas.calculate_total_direct_cost_with_fees,
    "calculate_sell_price": formulas.calculate_sell_price,
}

_SPECS_BY_METHOD: Dict[str, OperationSpec] = {op.method: op for op in OPERATIONS}


# =============================================================================
# CALL ENVELOPE
# =============================================================================


class CalculationCall(BaseModel):
    """Конверт вызова операции по имени контракта с именованными аргументами."""

    operation: str = Field(..., min_length=1, description="Имя операции контракта")
    arguments: Dict[str, Any] = Field(
        default_factory=dict, description="Аргументы по camelCase именам параметров"
    )

    model_config = {"frozen": True}


# =============================================================================
# FACADE
# =============================================================================


class CalculationUtils:
    """
    Фасад формул сметы, привязанный к одному числовому представлению.

    Examples:
        >>> utils = CalculationUtils()
        >>> utils.call("getAmountFromPercent", "0.1", "100")
        '10.00'
    """

    def __init__(self, config: Optional[CalculationConfig] = None):
        self.config = config or CalculationConfig()
        self.codec: NumericCodec = codec_for(self.config.representation)
        self._contract: Optional[CalculationCallValidator] = (
            CalculationCallValidator() if self.config.validate_contract else None
        )

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def call(self, operation: str, *args: Any) -> Any:
        """
        Вызов операции по имени контракта с позиционными аргументами.

        Перегрузка выбирается по числу аргументов и по None в
        обязательных позициях (nearlyEquals(None, x) → optional-вариант).

        Raises:
            UnknownOperationError: Если имя отсутствует в реестре
            TypeError: Если ни одна перегрузка не принимает аргументы
            ParseError: Если аргумент некорректен для представления
            jsonschema.ValidationError: Если конверт нарушает контракт
        """
        spec = self._resolve_positional(operation, args)
        arguments = dict(zip(spec.parameter_names, args))
        self._check_contract(spec.name, arguments)
        return self._invoke(spec, args)

    def call_envelope(self, envelope: Union[CalculationCall, Dict[str, Any]]) -> Any:
        """
        Вызов операции конвертом {"operation": ..., "arguments": {...}}.

        Отсутствующие optional аргументы передаются как None.
        """
        call = (
            envelope
            if isinstance(envelope, CalculationCall)
            else CalculationCall.model_validate(envelope)
        )
        spec = self._resolve_named(call.operation, call.arguments)
        self._check_contract(spec.name, call.arguments)

        args = tuple(call.arguments.get(name) for name in spec.parameter_names)
        return self._invoke(spec, args)

    def _resolve_positional(self, operation: str, args: tuple) -> OperationSpec:
        overloads = self._overloads(operation)
        for spec in overloads:
            if not spec.required_count <= len(args) <= len(spec.parameters):
                continue
            if any(a is None and not p.optional for p, a in zip(spec.parameters, args)):
                continue
            return spec

        expected = " or ".join(str(len(spec.parameters)) for spec in overloads)
        raise TypeError(f"{operation}() takes {expected} arguments, got {len(args)}")

    def _resolve_named(self, operation: str, arguments: Dict[str, Any]) -> OperationSpec:
        overloads = self._overloads(operation)
        for spec in overloads:
            if not set(arguments) <= set(spec.parameter_names):
                continue
            if any(arguments.get(p.name) is None for p in spec.parameters if not p.optional):
                continue
            return spec

        raise TypeError(f"{operation}() got unexpected arguments {sorted(arguments)}")

    @staticmethod
    def _overloads(operation: str) -> tuple:
        overloads = find_overloads(operation)
        if not overloads:
            raise UnknownOperationError(operation)
        return overloads

    def _check_contract(self, operation: str, arguments: Dict[str, Any]) -> None:
        if self._contract is not None:
            self._contract.validate({"operation": operation, "arguments": arguments})

    def _invoke(self, spec: OperationSpec, args: tuple) -> Any:
        decoded = []
        for param, value in zip(spec.parameters, args):
            if param.optional:
                decoded.append(self.codec.decode_optional(param.name, value))
            else:
                decoded.append(self.codec.decode(param.name, value))

        logger.debug("Dispatching %s to %s", spec.key, spec.method)
        result = _FORMULAS[spec.method](*decoded)

        if spec.returns is ValueKind.BOOLEAN:
            return result
        return self.codec.encode(result)

    def _by_method(self, method: str, *args: Any) -> Any:
        return self._invoke(_SPECS_BY_METHOD[method], args)

    # -------------------------------------------------------------------------
    # Time
    # -------------------------------------------------------------------------

    def convert_minutes_to_hours(self, minutes):
        return self._by_method("convert_minutes_to_hours", minutes)

    def convert_hours_to_minutes(self, hours):
        return self._by_method("convert_hours_to_minutes", hours)

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def safe_divide(self, first_value, second_value, fallback_value=None):
        return self._by_method("safe_divide", first_value, second_value, fallback_value)

    def nearly_equals(self, first_value, second_value) -> bool:
        return self._by_method("nearly_equals", first_value, second_value)

    def nearly_equals_optional(self, first_value, second_value) -> bool:
        return self._by_method("nearly_equals_optional", first_value, second_value)

    def get_percent_from_amount(self, amount, cost):
        return self._by_method("get_percent_from_amount", amount, cost)

    def get_amount_from_percent(self, percent, cost):
        return self._by_method("get_amount_from_percent", percent, cost)

    # -------------------------------------------------------------------------
    # Cost stages
    # -------------------------------------------------------------------------

    def calculate_contingency_percent(self, direct_cost, contingency_amount):
        return self._by_method("calculate_contingency_percent", direct_cost, contingency_amount)

    def calculate_contingency_amount(self, direct_cost, contingency_percent):
        return self._by_method("calculate_contingency_amount", direct_cost, contingency_percent)

    def calculate_escalation_percent(self, direct_cost, contingency_amount, escalation_amount):
        return self._by_method(
            "calculate_escalation_percent", direct_cost, contingency_amount, escalation_amount
        )

    def calculate_escalation_amount(self, direct_cost, contingency_percent, escalation_percent):
        return self._by_method(
            "calculate_escalation_amount", direct_cost, contingency_percent, escalation_percent
        )

    def calculate_markup_percent(self, gross_margin_percent):
        return self._by_method("calculate_markup_percent", gross_margin_percent)

    def calculate_markup_amount(
        self, direct_cost, contingency_percent, aggregated_fee_percent, markup_percent
    ):
        return self._by_method(
            "calculate_markup_amount",
            direct_cost,
            contingency_percent,
            aggregated_fee_percent,
            markup_percent,
        )

    def calculate_gross_margin_percent(
        self, direct_cost, contingency_amount, aggregated_fee_amount, gross_margin_amount
    ):
        return self._by_method(
            "calculate_gross_margin_percent",
            direct_cost,
            contingency_amount,
            aggregated_fee_amount,
            gross_margin_amount,
        )

    def calculate_gross_margin_amount(
        self, direct_cost, contingency_percent, aggregated_fee_percent, gross_margin_percent
    ):
        return self._by_method(
            "calculate_gross_margin_amount",
            direct_cost,
            contingency_percent,
            aggregated_fee_percent,
            gross_margin_percent,
        )

    def calculate_aggregated_fee_percent(self, direct_cost, contingency_amount, aggregated_fee_amount):
        return self._by_method(
            "calculate_aggregated_fee_percent", direct_cost, contingency_amount, aggregated_fee_amount
        )

    def calculate_aggregated_fee_amount(self, direct_cost, contingency_percent, aggregated_fee_percent):
        return self._by_method(
            "calculate_aggregated_fee_amount", direct_cost, contingency_percent, aggregated_fee_percent
        )

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def calculate_total_direct_cost_with_escalation(
        self, direct_cost, contingency_amount, escalation_amount, material_fee_amount
    ):
        return self._by_method(
            "calculate_total_direct_cost_with_escalation",
            direct_cost,
            contingency_amount,
            escalation_amount,
            material_fee_amount,
        )

    def calculate_total_direct_cost_with_fees(self, direct_cost, contingency_amount, aggregated_fee_amount):
        return self._by_method(
            "calculate_total_direct_cost_with_fees", direct_cost, contingency_amount, aggregated_fee_amount
        )

    def calculate_sell_price(
        self,
        direct_cost,
        contingency_amount,
        escalation_amount,
        material_fee_amount,
        gross_margin_amount,
    ):
        return self._by_method(
            "calculate_sell_price",
            direct_cost,
            contingency_amount,
            escalation_amount,
            material_fee_amount,
            gross_margin_amount,
        )

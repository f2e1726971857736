"""
Юнит-тесты для модуля Cost Stages

Проверяет:
1. Прямые и обратные формулы каждой надбавки над своей базой
2. Согласованность пар percent ↔ amount с точностью до округления
3. Тождество markup = gm / (1 - gm) и fallback при gm = 100%
4. Обратное решение gross margin amount через sell price
5. Нулевые и отрицательные базы без исключений
"""

from decimal import Decimal

import pytest

from estimate_formulas.errors import ParseError
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

DIRECT_COST = Decimal("1000")


class TestContingency:
    """Тесты contingency (база: direct_cost)"""

    def test_amount_from_percent(self) -> None:
        """5% от 1000 = 50.00"""
        assert calculate_contingency_amount(DIRECT_COST, Decimal("0.05")) == Decimal("50.00")

    def test_percent_from_amount(self) -> None:
        """50 от 1000 = 5%"""
        assert calculate_contingency_percent(DIRECT_COST, Decimal("50")) == Decimal("0.05")

    def test_zero_direct_cost(self) -> None:
        """Нулевая стоимость → percent 0, amount 0"""
        assert calculate_contingency_percent(Decimal("0"), Decimal("50")) == Decimal("0")
        assert calculate_contingency_amount(Decimal("0"), Decimal("0.05")) == Decimal("0.00")

    def test_negative_direct_cost(self) -> None:
        """Отрицательная стоимость (кредит) даёт отрицательную сумму"""
        assert calculate_contingency_amount(Decimal("-1000"), Decimal("0.05")) == Decimal("-50.00")


class TestEscalation:
    """Тесты escalation (база: direct_cost + contingency_amount)"""

    def test_amount_uses_contingency_base(self) -> None:
        """3% от (1000 + 50.00) = 31.50"""
        amount = calculate_escalation_amount(DIRECT_COST, Decimal("0.05"), Decimal("0.03"))
        assert amount == Decimal("31.50")

    def test_percent_uses_contingency_base(self) -> None:
        """31.50 от 1050 = 3%"""
        percent = calculate_escalation_percent(DIRECT_COST, Decimal("50.00"), Decimal("31.50"))
        assert percent == Decimal("0.03")

    def test_zero_base(self) -> None:
        """Нулевая база → percent 0"""
        assert calculate_escalation_percent(Decimal("0"), Decimal("0"), Decimal("10")) == Decimal("0")

    def test_contingency_amount_rounded_before_base(self) -> None:
        """contingency_amount округляется до центов до построения базы"""
        # contingency = round(333.33 * 0.1) = 33.33, база = 366.66
        amount = calculate_escalation_amount(Decimal("333.33"), Decimal("0.1"), Decimal("0.5"))
        assert amount == Decimal("183.33")


class TestAggregatedFee:
    """Тесты aggregated fee / WEFS (база: direct_cost + contingency_amount)"""

    def test_amount(self) -> None:
        """2% от 1050 = 21.00"""
        amount = calculate_aggregated_fee_amount(DIRECT_COST, Decimal("0.05"), Decimal("0.02"))
        assert amount == Decimal("21.00")

    def test_percent(self) -> None:
        """21 от 1050 = 2%"""
        percent = calculate_aggregated_fee_percent(DIRECT_COST, Decimal("50"), Decimal("21"))
        assert percent == Decimal("0.02")

    def test_roundtrip(self) -> None:
        """amount → percent → amount воспроизводит сумму"""
        contingency_percent = Decimal("0.1")
        amount = calculate_aggregated_fee_amount(Decimal("333.33"), contingency_percent, Decimal("0.07"))
        assert amount == Decimal("25.67")

        contingency_amount = calculate_contingency_amount(Decimal("333.33"), contingency_percent)
        percent = calculate_aggregated_fee_percent(Decimal("333.33"), contingency_amount, amount)
        assert calculate_aggregated_fee_amount(
            Decimal("333.33"), contingency_percent, percent
        ) == amount


class TestMarkupPercent:
    """Тесты calculate_markup_percent"""

    @pytest.mark.parametrize(
        "gross_margin_percent,expected",
        [
            (Decimal("0"), Decimal("0")),
            (Decimal("0.2"), Decimal("0.25")),
            (Decimal("0.5"), Decimal("1")),
            (Decimal("0.75"), Decimal("3")),
        ],
    )
    def test_identity(self, gross_margin_percent: Decimal, expected: Decimal) -> None:
        """markup = gm / (1 - gm)"""
        assert calculate_markup_percent(gross_margin_percent) == expected

    def test_full_margin_fallback(self) -> None:
        """gm = 100% → fallback 1 вместо деления на ноль"""
        assert calculate_markup_percent(Decimal("1.0")) == Decimal("1")
        assert calculate_markup_percent(Decimal("1")) == MARKUP_PERCENT_FALLBACK

    def test_margin_above_full_is_negative(self) -> None:
        """gm > 100% не ограничивается: markup отрицательный"""
        assert calculate_markup_percent(Decimal("1.2")) == Decimal("-6")


class TestMarkupAmount:
    """Тесты calculate_markup_amount (база: total direct cost)"""

    def test_amount(self) -> None:
        """25% от (1000 + 50.00 + 21.00) = 267.75"""
        amount = calculate_markup_amount(
            DIRECT_COST, Decimal("0.05"), Decimal("0.02"), Decimal("0.25")
        )
        assert amount == Decimal("267.75")

    def test_rounded_chain(self) -> None:
        """Промежуточные суммы округлены: база 333.33 + 33.33 + 25.67"""
        amount = calculate_markup_amount(
            Decimal("333.33"), Decimal("0.1"), Decimal("0.07"), Decimal("0.15")
        )
        assert amount == Decimal("58.85")


class TestGrossMargin:
    """Тесты gross margin (доля sell price)"""

    def test_amount_back_solved_from_sell_price(self) -> None:
        """sell = 1071 / 0.8 = 1338.75, amount = 267.75"""
        amount = calculate_gross_margin_amount(
            DIRECT_COST, Decimal("0.05"), Decimal("0.02"), Decimal("0.2")
        )
        assert amount == Decimal("267.75")

    def test_percent_of_sell_price(self) -> None:
        """267.75 / (1071 + 267.75) = 20%"""
        percent = calculate_gross_margin_percent(
            DIRECT_COST, Decimal("50.00"), Decimal("21.00"), Decimal("267.75")
        )
        assert percent == Decimal("0.2")

    def test_amount_rounded_to_cents(self) -> None:
        """sell = 392.33 / 0.85, amount округлён до центов"""
        amount = calculate_gross_margin_amount(
            Decimal("333.33"), Decimal("0.1"), Decimal("0.07"), Decimal("0.15")
        )
        assert amount == Decimal("69.23")

    def test_margin_and_markup_agree(self) -> None:
        """Markup amount с markup = gm/(1-gm) совпадает с gross margin amount"""
        gross_margin_percent = Decimal("0.2")
        markup_percent = calculate_markup_percent(gross_margin_percent)

        markup_amount = calculate_markup_amount(
            DIRECT_COST, Decimal("0.05"), Decimal("0.02"), markup_percent
        )
        margin_amount = calculate_gross_margin_amount(
            DIRECT_COST, Decimal("0.05"), Decimal("0.02"), gross_margin_percent
        )
        assert markup_amount == margin_amount

    def test_zero_sell_price(self) -> None:
        """Нулевой sell price → percent 0"""
        percent = calculate_gross_margin_percent(
            Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0")
        )
        assert percent == Decimal("0")

    def test_full_margin_sell_price_falls_back_to_zero(self) -> None:
        """gm = 100%: sell price через safe_divide = 0, amount = -tdc"""
        amount = calculate_gross_margin_amount(
            DIRECT_COST, Decimal("0.05"), Decimal("0.02"), Decimal("1")
        )
        assert amount == Decimal("-1071.00")


class TestNumericInputs:
    """Десятичные строки и int приводятся к Decimal до арифметики"""

    @pytest.mark.parametrize(
        "formula, args, expected",
        [
            (calculate_contingency_percent, ("1000", "50"), Decimal("0.05")),
            (calculate_contingency_amount, (1000, "0.05"), Decimal("50.00")),
            (calculate_escalation_percent, ("1000", "50", "31.50"), Decimal("0.03")),
            (calculate_escalation_amount, ("1000", "0.05", "0.03"), Decimal("31.50")),
            (calculate_aggregated_fee_percent, (1000, 50, 21), Decimal("0.02")),
            (calculate_aggregated_fee_amount, ("1000", "0.05", "0.02"), Decimal("21.00")),
            (calculate_markup_percent, ("0.2",), Decimal("0.25")),
            (calculate_markup_amount, ("1000", "0.05", "0.02", "0.25"), Decimal("267.75")),
            (calculate_gross_margin_percent, ("1000", "50", "21", "267.75"), Decimal("0.2")),
            (calculate_gross_margin_amount, (1000, "0.05", "0.02", "0.2"), Decimal("267.75")),
        ],
    )
    def test_strings_and_ints(self, formula, args, expected: Decimal) -> None:
        result = formula(*args)

        assert isinstance(result, Decimal)
        assert result == expected

    def test_malformed_argument_named(self) -> None:
        """ParseError называет параметр формулы"""
        with pytest.raises(ParseError) as exc_info:
            calculate_escalation_percent("1000", "fifty", "31.50")

        assert exc_info.value.parameter == "contingency_amount"

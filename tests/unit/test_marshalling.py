"""
Тесты числовых кодеков границы хоста

Проверяет:
1. DecimalStringCodec: разбор строк, фиксированная нотация на выходе
2. FloatCodec: разбор float через repr, float на выходе
3. Запрет смешивания представлений (ParseError)
4. Выбор кодека по CalculationConfig
"""

import math
from decimal import Decimal

import pytest
from pydantic import ValidationError

from estimate_formulas.config import CalculationConfig, NumericRepresentation
from estimate_formulas.errors import ParseError
from estimate_formulas.interop.marshalling import DecimalStringCodec, FloatCodec, codec_for


class TestDecimalStringCodec:
    """Тесты DecimalStringCodec"""

    def test_decode(self) -> None:
        """Десятичная строка → Decimal"""
        codec = DecimalStringCodec()
        assert codec.decode("cost", "1234.50") == Decimal("1234.50")
        assert codec.decode("cost", "-0.125") == Decimal("-0.125")

    def test_encode_fixed_notation(self) -> None:
        """Decimal → строка без экспоненты"""
        codec = DecimalStringCodec()
        assert codec.encode(Decimal("10.00")) == "10.00"
        assert codec.encode(Decimal("1E+2")) == "100"
        assert codec.encode(Decimal("1.5")) == "1.5"

    def test_malformed_string(self) -> None:
        """Нечисловая строка → ParseError"""
        with pytest.raises(ParseError, match="amount"):
            DecimalStringCodec().decode("amount", "12.5.1")

    def test_float_rejected(self) -> None:
        """float на строковой границе → ParseError"""
        with pytest.raises(ParseError, match="expected a decimal string"):
            DecimalStringCodec().decode("amount", 12.5)

    def test_negative_zero_encoded_unsigned(self) -> None:
        """-0.00 сериализуется как 0.00"""
        assert DecimalStringCodec().encode(Decimal("-0.00")) == "0.00"
        assert DecimalStringCodec().encode(Decimal("-0")) == "0"

    def test_exponent_within_range(self) -> None:
        """Экспоненциальная запись в пределах MAX_ABS_VALUE принимается"""
        assert DecimalStringCodec().decode("cost", "1e27") == Decimal("1E+27")

    @pytest.mark.parametrize("value", ["1e29", "-79228162514264337593543950336"])
    def test_out_of_range(self, value: str) -> None:
        """Значение больше MAX_ABS_VALUE → ParseError"""
        with pytest.raises(ParseError, match="supported range"):
            DecimalStringCodec().decode("cost", value)

    def test_optional(self) -> None:
        """None остаётся None только для optional"""
        codec = DecimalStringCodec()
        assert codec.decode_optional("fallbackValue", None) is None
        assert codec.decode_optional("fallbackValue", "5") == Decimal("5")
        with pytest.raises(ParseError):
            codec.decode("firstValue", None)


class TestFloatCodec:
    """Тесты FloatCodec"""

    def test_decode_uses_shortest_repr(self) -> None:
        """0.1 → Decimal('0.1'), а не двоичное приближение"""
        codec = FloatCodec()
        assert codec.decode("percent", 0.1) == Decimal("0.1")
        assert codec.decode("cost", 100) == Decimal("100")

    def test_encode(self) -> None:
        """Decimal → float"""
        assert FloatCodec().encode(Decimal("10.00")) == 10.0

    def test_negative_zero_encoded_unsigned(self) -> None:
        result = FloatCodec().encode(Decimal("-0.00"))

        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_out_of_range(self) -> None:
        """float больше MAX_ABS_VALUE → ParseError"""
        with pytest.raises(ParseError, match="supported range"):
            FloatCodec().decode("cost", 1e300)

    def test_string_rejected(self) -> None:
        """Строка на float-границе → ParseError"""
        with pytest.raises(ParseError, match="expected a number"):
            FloatCodec().decode("cost", "100")

    def test_bool_rejected(self) -> None:
        """bool не является числом"""
        with pytest.raises(ParseError):
            FloatCodec().decode("cost", True)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        """NaN/Inf → ParseError"""
        with pytest.raises(ParseError, match="finite"):
            FloatCodec().decode("cost", value)


class TestCodecSelection:
    """Тесты выбора кодека и конфигурации"""

    def test_codec_for(self) -> None:
        """Кодек по представлению"""
        assert isinstance(codec_for(NumericRepresentation.DECIMAL_STRING), DecimalStringCodec)
        assert isinstance(codec_for("float"), FloatCodec)

    def test_default_config(self) -> None:
        """По умолчанию — десятичные строки и проверка контракта"""
        config = CalculationConfig()
        assert config.representation is NumericRepresentation.DECIMAL_STRING
        assert config.validate_contract is True

    def test_config_from_string(self) -> None:
        """Представление задаётся строкой"""
        config = CalculationConfig(representation="float")
        assert config.representation is NumericRepresentation.FLOAT

    def test_unknown_representation(self) -> None:
        """Неизвестное представление отвергается"""
        with pytest.raises(ValidationError):
            CalculationConfig(representation="binary")

    def test_config_frozen(self) -> None:
        """Конфигурация неизменяема"""
        config = CalculationConfig()
        with pytest.raises(ValidationError):
            config.validate_contract = False

"""
Marshalling — числовые кодеки границы хоста

Формулы считают в Decimal. На границе процесса/рантайма значения приходят
в одном из двух представлений:
- DecimalStringCodec: десятичные строки (без дрейфа float через границу)
- FloatCodec: нативные float

Кодек отвергает значения другого представления: смешивать строки и float
в одной цепочке вызовов нельзя. Результаты двух кодеков не бит-идентичны.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Optional, Union

from estimate_formulas.config import NumericRepresentation
from estimate_formulas.errors import ParseError
from estimate_formulas.math.numerical_safeguards import MAX_ABS_VALUE, to_decimal

logger = logging.getLogger(__name__)


class NumericCodec:
    """Базовый кодек: разбор аргументов в Decimal и обратная сериализация."""

    representation: NumericRepresentation

    def decode(self, name: str, value: Any) -> Decimal:
        """
        Разбор обязательного аргумента.

        Raises:
            ParseError: Если значение некорректно для этого представления
                или по модулю больше MAX_ABS_VALUE
        """
        try:
            result = self._decode(name, value)
            if abs(result) > MAX_ABS_VALUE:
                raise ParseError(name, value, "value out of supported range")
        except ParseError as e:
            logger.warning("Rejected %s argument %s=%r: %s", self.representation.value, name, value, e.reason)
            raise
        return result

    def decode_optional(self, name: str, value: Any) -> Optional[Decimal]:
        """Разбор optional аргумента: None остаётся None."""
        if value is None:
            return None
        return self.decode(name, value)

    def encode(self, value: Decimal) -> Any:
        raise NotImplementedError

    def _decode(self, name: str, value: Any) -> Decimal:
        raise NotImplementedError


class DecimalStringCodec(NumericCodec):
    """
    Десятичные строки на входе и выходе.

    Результат сериализуется в фиксированной нотации ("1.5", "10.00"),
    без экспоненты.
    """

    representation = NumericRepresentation.DECIMAL_STRING

    def _decode(self, name: str, value: Any) -> Decimal:
        if not isinstance(value, str):
            raise ParseError(name, value, "expected a decimal string")
        return to_decimal(value, name)

    def encode(self, value: Decimal) -> str:
        if value.is_zero():
            value = value.copy_abs()
        return format(value, "f")


class FloatCodec(NumericCodec):
    """
    Нативные числа на входе, float на выходе.

    float переводится в Decimal через кратчайшее repr, поэтому 0.1 → Decimal("0.1").
    """

    representation = NumericRepresentation.FLOAT

    def _decode(self, name: str, value: Any) -> Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParseError(name, value, "expected a number")
        if isinstance(value, int):
            return Decimal(value)
        if not math.isfinite(value):
            raise ParseError(name, value, "value must be finite")
        return Decimal(repr(value))

    def encode(self, value: Decimal) -> float:
        if value.is_zero():
            value = value.copy_abs()
        return float(value)


_CODECS = {
    NumericRepresentation.DECIMAL_STRING: DecimalStringCodec,
    NumericRepresentation.FLOAT: FloatCodec,
}


def codec_for(representation: Union[NumericRepresentation, str]) -> NumericCodec:
    """Кодек для представления развёртывания."""
    return _CODECS[NumericRepresentation(representation)]()

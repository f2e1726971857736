"""
Host boundary для формул сметы.

Числовые кодеки (десятичные строки / float) и фасад CalculationUtils.
"""

from estimate_formulas.errors import ParseError, UnknownOperationError
from estimate_formulas.interop.calculation_utils import CalculationCall, CalculationUtils
from estimate_formulas.interop.marshalling import (
    DecimalStringCodec,
    FloatCodec,
    NumericCodec,
    codec_for,
)

__all__ = [
    # Errors
    "ParseError",
    "UnknownOperationError",
    # Codecs
    "NumericCodec",
    "DecimalStringCodec",
    "FloatCodec",
    "codec_for",
    # Facade
    "CalculationCall",
    "CalculationUtils",
]

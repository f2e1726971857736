"""
Domain value conversions.

Contains unit converters that share the numeric guards of the math layer.
"""

from estimate_formulas.domain.time_units import (
    MINUTES_IN_HOUR,
    convert_hours_to_minutes,
    convert_minutes_to_hours,
)

__all__ = [
    # Time units
    "MINUTES_IN_HOUR",
    "convert_hours_to_minutes",
    "convert_minutes_to_hours",
]

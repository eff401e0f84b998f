"""
Validation of incoming user payloads
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

# Plain decimal notation with optional exponent, e.g. "24", "-3", "2.4e1"
_NUMERIC_STRING = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def coerce_age(value: Any) -> Optional[int]:
    """
    Convert an age value into the integer stored in the age column

    Accepts ints, finite floats and numeric strings. Fractional values are
    rounded to the nearest integer, halves away from zero, as an INT column
    stores them. Returns None for anything else: missing values, booleans,
    NaN, infinities and non-numeric strings.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_STRING.match(text):
            return None
        number = float(text)
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(Decimal(repr(number)).to_integral_value(rounding=ROUND_HALF_UP))


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_user(data: Any) -> bool:
    """Return True when data carries a usable fullname, study_level and age"""
    if not isinstance(data, dict):
        return False
    if not _is_non_empty_string(data.get("fullname")):
        return False
    if not _is_non_empty_string(data.get("study_level")):
        return False
    return coerce_age(data.get("age")) is not None

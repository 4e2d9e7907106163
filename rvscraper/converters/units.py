"""
Numeric and length parsing for scraped spec values.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from numbers import Number

from ..errors import InvalidFormatError, InvalidTypeError

# Leading number of a string, after thousands separators are removed
LEADING_NUMBER_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# e.g. 8' 4", 8 ft 4 in, 8ft., 5' 1" w/A/C
FEET_INCHES_PATTERN = re.compile(
    r"^(\d+\.?\d*)\s*(?:'|ft\.?)\s*(?:(\d+\.?\d*)\s*(?:''|\"|in\.?)?)?",
    re.IGNORECASE,
)

# One awning length inside a run-together cell, e.g. the 10'2" in 8' 10'2"
AWNING_PATTERN = re.compile(r"(\d+')(?:\s*(\d*)\")?(?:\s*(\d*)'')?")


def as_number(value: float):
    """Return an int for integral floats so JSON output reads 2080, not 2080.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def round_half_up(value, places: int = 1):
    """Round halves away from zero, the way a spreadsheet (or JS Math.round) does."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return as_number(float(rounded))


def parse_numeric_string(value):
    """
    Convert a numeric string to a number, passing numbers and None through.

    Thousands separators are stripped and the leading number is parsed, so
    "4,915 lbs" becomes 4915. A string with no leading number becomes None.

    Args:
        value: str, int, float or None

    Returns:
        int | float | None

    Raises:
        InvalidTypeError: for any other input type (bool, dict, list, ...)
    """
    if isinstance(value, bool):
        raise InvalidTypeError(f"Invalid type for numeric conversion: {type(value).__name__}")
    if value is None or isinstance(value, Number):
        return value
    if not isinstance(value, str):
        raise InvalidTypeError(f"Invalid type for numeric conversion: {type(value).__name__}")

    match = LEADING_NUMBER_PATTERN.match(value.replace(",", ""))
    if not match:
        return None
    return as_number(float(match.group(1)))


def feet_inches_to_inches(text):
    """
    Convert a feet/inches measurement to inches.

    Trailing descriptive text is ignored:
        feet_inches_to_inches("8' 4\\"")        -> 100
        feet_inches_to_inches("8 ft 4 in")     -> 100
        feet_inches_to_inches("8'")            -> 96
        feet_inches_to_inches("5' 1\\" w/A/C")  -> 61

    Raises:
        InvalidFormatError: if the text does not start with a feet quantity
    """
    if not isinstance(text, str):
        raise InvalidFormatError(f"Invalid input format: {text!r}")

    match = FEET_INCHES_PATTERN.match(text.strip())
    if not match:
        raise InvalidFormatError(f"Invalid input format: {text!r}")

    feet = float(match.group(1))
    inches = float(match.group(2)) if match.group(2) else 0
    return as_number(feet * 12 + inches)


def split_awning_measurements(text):
    """
    Separate awning lengths that a site ran together in one cell.

    split_awning_measurements("8' 10'2\\"") -> "8' & 10' 2\\""
    """
    measurements = []

    for match in AWNING_PATTERN.finditer(text):
        measurement = match.group(1)

        inches = 0
        if match.group(2):
            inches += int(match.group(2))
        if match.group(3):
            inches += int(match.group(3))

        if inches > 0:
            measurement += f' {inches}"'
        measurements.append(measurement)

    return " & ".join(measurements)

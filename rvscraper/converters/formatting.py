"""
Type-directed value formatting.

Each canonical field has a unit tag in STANDARDIZED_SCHEMA; format_value
converts a scraped value into that unit.
"""

import re
from numbers import Number

from ..config import STANDARDIZED_SCHEMA
from ..errors import InvalidFormatError, UnknownFormatTypeError
from .units import (
    FEET_INCHES_PATTERN,
    as_number,
    feet_inches_to_inches,
    parse_numeric_string,
    round_half_up,
)

NM_TO_LBFT = 0.737562
CUFT_TO_GAL = 7.481
GAL_TO_CUFT = 0.133681
TON_TO_BTU = 12000
KW_TO_BTU = 3412

NEWTON_METERS_PATTERN = re.compile(r"nm|newton.*meters", re.IGNORECASE)
CUBIC_FEET_PATTERN = re.compile(r"cu\.?\s*ft", re.IGNORECASE)
GALLONS_PATTERN = re.compile(r"gal\.?", re.IGNORECASE)
TON_PATTERN = re.compile(r"ton", re.IGNORECASE)
KILOWATT_PATTERN = re.compile(r"kw|kilowatt", re.IGNORECASE)

# Feet/inches expression anywhere in the text, e.g. "approx. 11' 2\" with AC"
FEET_INCHES_SEARCH_PATTERN = re.compile(FEET_INCHES_PATTERN.pattern.lstrip("^"), re.IGNORECASE)

# A bare inch measurement such as 96", 96 in, 101.5 inches
INCHES_ONLY_PATTERN = re.compile(r"^\s*(\d+\.?\d*)\s*(?:\"|''|in\b\.?|inches)?\s*$", re.IGNORECASE)
# A bare feet value such as 30, 30 ft, 30.5 feet
FEET_ONLY_PATTERN = re.compile(r"^\s*(\d+\.?\d*)\s*(?:ft\b\.?|feet)?\s*$", re.IGNORECASE)

# Phrases meaning a feature is absent
NEGATIVE_PATTERN = re.compile(
    r"^\s*(?:no|none|n/?a|false|0|-+|not\b.*|without\b.*|optional\b.*)\s*\.?\s*$",
    re.IGNORECASE,
)


def coerce_boolean(value):
    """
    Turn a scraped feature value into True/False.

    A non-empty string is True unless it reads as a negative ("No", "N/A",
    "Not available", "Optional", "-"). Numbers are True when non-zero.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, Number):
        return value != 0
    text = str(value).strip()
    if not text:
        return False
    return not NEGATIVE_PATTERN.match(text)


def _to_inches(value):
    if isinstance(value, Number):
        return value
    match = INCHES_ONLY_PATTERN.match(value)
    if match:
        return as_number(float(match.group(1)))
    return feet_inches_to_inches(value)


def _scaled(value, pattern, factor):
    number = parse_numeric_string(value)
    if number is not None and isinstance(value, str) and pattern.search(value):
        return number * factor
    return number


def format_value(key, value):
    """
    Convert a value to the unit declared for its canonical key.

    Examples:
        format_value("Water heater tank capacity gl", "10 cu ft")  -> 74.81
        format_value("Engine torque lbft", "1,000 Nm")             -> 737.562
        format_value("Air conditioning", "1.5 ton")                -> 18000
        format_value("Width inmm", "8' 4\\"")                       -> 100

    None passes through unchanged for every tag.

    Raises:
        UnknownFormatTypeError: the key has no unit tag in the schema
        InvalidFormatError / InvalidTypeError: the value can't be converted
    """
    unit_tag = STANDARDIZED_SCHEMA.get(key)
    if unit_tag is None:
        raise UnknownFormatTypeError(key)

    if value is None:
        return None

    if unit_tag == "number":
        return parse_numeric_string(value)

    if unit_tag == "string":
        return value if isinstance(value, str) else str(value)

    if unit_tag == "boolean":
        return coerce_boolean(value)

    if unit_tag == "poundfeet":
        return _scaled(value, NEWTON_METERS_PATTERN, NM_TO_LBFT)

    if unit_tag == "inches":
        return _to_inches(value)

    if unit_tag == "feetinches":
        match = FEET_INCHES_SEARCH_PATTERN.search(str(value))
        if not match:
            raise InvalidFormatError(f"Invalid feet/inches value for {key}: {value!r}")
        return match.group(0).strip()

    if unit_tag == "feet":
        if isinstance(value, Number):
            return value
        match = FEET_ONLY_PATTERN.match(str(value))
        if match:
            return as_number(float(match.group(1)))
        return round_half_up(feet_inches_to_inches(value) / 12, 1)

    if unit_tag == "gallons":
        return _scaled(value, CUBIC_FEET_PATTERN, CUFT_TO_GAL)

    if unit_tag == "cubic feet":
        return _scaled(value, GALLONS_PATTERN, GAL_TO_CUFT)

    if unit_tag == "btu":
        number = parse_numeric_string(value)
        if number is None or not isinstance(value, str):
            return number
        if TON_PATTERN.search(value):
            return as_number(number * TON_TO_BTU)
        if KILOWATT_PATTERN.search(value):
            return as_number(number * KW_TO_BTU)
        return number

    raise UnknownFormatTypeError(key, unit_tag)

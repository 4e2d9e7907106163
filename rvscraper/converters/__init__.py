"""
Value converters for scraped RV specs.

Pure functions; each turns one raw value into its canonical form:
- units: numeric strings, feet/inches, run-together awning lengths
- tires: tire sidewall codes
- weights: GVWR / dry weight / CCC algebra
- formatting: unit-tag dispatch used for every canonical field
"""

from .units import (
    parse_numeric_string,
    feet_inches_to_inches,
    split_awning_measurements,
    round_half_up,
)
from .tires import TireSpec, parse_tire_code
from .weights import add_missing_gvwr_uvw_ccc
from .formatting import format_value, coerce_boolean

__all__ = [
    "parse_numeric_string",
    "feet_inches_to_inches",
    "split_awning_measurements",
    "round_half_up",
    "TireSpec",
    "parse_tire_code",
    "add_missing_gvwr_uvw_ccc",
    "format_value",
    "coerce_boolean",
]

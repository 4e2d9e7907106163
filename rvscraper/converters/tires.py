"""
Tire code parsing.

Decodes sidewall codes such as "ST205/75R14D" into dimensions. The overall
tire diameter is what the target form wants; the rest is kept on the TireSpec
for logging and tests.
"""

import re
from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel

from ..logging import log_warning

# vehicle class, section width mm, aspect ratio, construction, wheel diameter, load range
TIRE_CODE_PATTERN = re.compile(
    r"(PT|LT|ST|T|)(\d{3})/(\d{2,3})/?\s?(B|D|R|)(\d{1,2})(?:LR)?([A-N]?)"
)

VEHICLE_CLASSES = {
    "P": "Passenger Car",
    "PT": "Passenger Car",
    "LT": "Light Truck",
    "ST": "Special Trailer",
    "T": "Temporary",
}

CONSTRUCTION_TYPES = {
    "B": "Bias belt",
    "D": "Diagonal",
    "R": "Radial",
    "": "Cross-ply",
}

LOAD_RANGE_PLY_RATINGS = {
    "A": 2,
    "B": 4,
    "C": 6,
    "D": 8,
    "E": 10,
    "F": 12,
    "G": 14,
    "H": 16,
    "J": 18,
    "L": 20,
    "M": 22,
    "N": 24,
}

MM_PER_INCH = Decimal("25.4")
TENTH = Decimal("0.1")


class TireSpec(BaseModel):
    """Parsed tire code. Every field except tire_code is None when the code didn't parse."""
    tire_code: str | None = None
    vehicle_class: str | None = None
    section_width_mm: int | None = None
    section_width_in: float | None = None
    aspect_ratio: float | None = None
    construction: str | None = None
    wheel_diameter_in: int | None = None
    tire_diameter_in: float | None = None
    load_range: str | None = None
    ply_rating: int | None = None


def parse_tire_code(code):
    """
    Parse a tire code into a TireSpec.

    Example:
        parse_tire_code("ST205/75R14D") ->
            vehicle_class="Special Trailer", section_width_mm=205,
            section_width_in=8.1, aspect_ratio=0.75, construction="Radial",
            wheel_diameter_in=14, tire_diameter_in=26.2, load_range="D",
            ply_rating=8

    A code that doesn't match returns an all-None TireSpec and logs a warning;
    a bad tire code should not sink the rest of the record.
    """
    match = TIRE_CODE_PATTERN.search(code) if isinstance(code, str) else None
    if not match:
        log_warning(f"Invalid tire code format: {code!r}")
        return TireSpec(tire_code=code if isinstance(code, str) else None)

    vehicle_class, width_mm, aspect, construction, wheel_diameter, load_range = match.groups()

    # Decimal keeps the half-up rounding exact (26.15 -> 26.2)
    section_width_in = (Decimal(width_mm) / MM_PER_INCH).quantize(TENTH, rounding=ROUND_HALF_UP)
    aspect_ratio = Decimal(aspect) / 100
    tire_diameter_in = (
        Decimal(wheel_diameter) + 2 * (section_width_in * aspect_ratio)
    ).quantize(TENTH, rounding=ROUND_HALF_UP)

    return TireSpec(
        tire_code=code,
        vehicle_class=VEHICLE_CLASSES.get(vehicle_class),
        section_width_mm=int(width_mm),
        section_width_in=float(section_width_in),
        aspect_ratio=float(aspect_ratio),
        construction=CONSTRUCTION_TYPES[construction],
        wheel_diameter_in=int(wheel_diameter),
        tire_diameter_in=float(tire_diameter_in),
        load_range=load_range or None,
        ply_rating=LOAD_RANGE_PLY_RATINGS.get(load_range),
    )

"""
Weight algebra: GVWR = UVW (dry weight) + CCC (cargo carrying capacity).
"""

from ..config import CCC_FIELD, DRY_WEIGHT_FIELD, GVWR_FIELD
from .units import parse_numeric_string


def add_missing_gvwr_uvw_ccc(record):
    """
    Fill in whichever of dry weight, GVWR and CCC is missing from the other two.

    Mutates the record in place and returns it. Present weight fields are
    normalized to numbers; absent fields are only added when they can be
    computed. With fewer than two known weights nothing is added.

    Example:
        record = {"Dry weight lbs": "4,915", "Gvwr lbskgs": "6,995"}
        add_missing_gvwr_uvw_ccc(record)
        record["CCC"]  # 2080
    """
    for field in (DRY_WEIGHT_FIELD, GVWR_FIELD, CCC_FIELD):
        if field in record:
            record[field] = parse_numeric_string(record[field])

    # gvwr - ccc = dry weight
    if record.get(GVWR_FIELD) and record.get(CCC_FIELD):
        record[DRY_WEIGHT_FIELD] = record[GVWR_FIELD] - record[CCC_FIELD]

    # dry weight + ccc = gvwr
    if record.get(DRY_WEIGHT_FIELD) and record.get(CCC_FIELD):
        record[GVWR_FIELD] = record[DRY_WEIGHT_FIELD] + record[CCC_FIELD]

    # gvwr - dry weight = ccc
    if record.get(GVWR_FIELD) and record.get(DRY_WEIGHT_FIELD):
        record[CCC_FIELD] = record[GVWR_FIELD] - record[DRY_WEIGHT_FIELD]

    return record

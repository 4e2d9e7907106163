"""
Record transformer: one ScrapedPage in, one canonical record out.

Steps:
1. resolve raw keys to canonical keys (discarded keys dropped)
2. identity fields (URL, Year, Make, Type, Model, Trim, Name, ...)
3. floor plan image
4. awning lengths
5. GVWR / dry weight / CCC
6. tire code -> rear tire and wheel diameters
7. unit formatting of every field
8. verifyManually list of null fields

Errors in 1-2 propagate so the caller can fail the URL. Errors in 3-7 are
logged and leave the affected field null.
"""

import re
import urllib.parse
from pathlib import Path

from .config import (
    AWNING_LENGTH_FIELD,
    DESCRIPTION_FIELD,
    FLOOR_PLAN_FIELD,
    MAKE_FIELD,
    MODEL_FIELD,
    NAME_FIELD,
    REAR_TIRE_DIAMETER_FIELD,
    REAR_WHEEL_DIAMETER_FIELD,
    TIRE_CODE_FIELD,
    TRIM_FIELD,
    TYPE_FIELD,
    URL_FIELD,
    VERIFY_MANUALLY_KEY,
    WEB_FEATURES_FIELD,
    YEAR_FIELD,
)
from .converters import (
    add_missing_gvwr_uvw_ccc,
    format_value,
    parse_tire_code,
    split_awning_measurements,
)
from .errors import ImageConversionError, InvalidFormatError, InvalidTypeError
from .logging import log_stage, log_warning
from .utils.driver_utils import is_valid_url
from .utils.image_utils import download_and_convert_to_png

RV_TYPE_PATTERNS = {
    "Travel Trailer": re.compile(r"travel[^a-zA-Z]{0,2}trailer"),
    "Fifth Wheel": re.compile(r"fifth[^a-zA-Z]{0,2}wheel"),
    "Toy Hauler": re.compile(r"toy[^a-zA-Z]{0,2}hauler"),
}
TOY_HAULER = "Toy Hauler"


def get_rv_type_from_url(url):
    """
    Infer the RV type from the URL.

    "https://www.granddesignrv.com/travel-trailers/imagine/2400bh" -> "Travel Trailer"
    ".../toy-haulers/momentum-g-class-travel-trailers/21g"        -> "Travel Trailer Toy Hauler"
    ".../toy-haulers/momentum-m-class/336m"                        -> None

    "Toy Hauler" only qualifies another type; on its own the type is unknown.

    Raises:
        ValueError: if url isn't a valid URL
    """
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {url!r}")

    lower_url = url.lower()
    base_type = None
    for rv_type, pattern in RV_TYPE_PATTERNS.items():
        if rv_type != TOY_HAULER and pattern.search(lower_url):
            base_type = rv_type

    if base_type is None:
        return None
    if RV_TYPE_PATTERNS[TOY_HAULER].search(lower_url):
        return f"{base_type} {TOY_HAULER}"
    return base_type


def get_last_url_segment(url):
    """Last non-empty path segment: ".../imagine/2400bh/" -> "2400bh" (None for a bare host)."""
    segments = [segment for segment in urllib.parse.urlparse(url).path.split("/") if segment]
    return segments[-1] if segments else None


def build_name(record):
    """Display name "{Year} {Make} {Model} {Trim}", skipping empty parts."""
    parts = [record.get(field) for field in (YEAR_FIELD, MAKE_FIELD, MODEL_FIELD, TRIM_FIELD)]
    return " ".join(str(part).strip() for part in parts if part not in (None, ""))


def floor_plan_base_name(record, url):
    """e.g. "Imagine__2400BH"; falls back to the URL tail."""
    parts = [record.get(MODEL_FIELD), record.get(TRIM_FIELD)]
    parts = [re.sub(r"\s+", "_", str(part).strip()) for part in parts if part]
    return "__".join(parts) if parts else (get_last_url_segment(url) or "floor_plan")


def _first_present(*values):
    for value in values:
        if value not in (None, ""):
            return value
    return None


class RecordTransformer:
    """
    Builds canonical records.

    Args:
        resolver: KeyResolver
        image_dir: folder floor plans are saved to
        image_converter: callable(source_url, desired_base_name, output_dir) -> saved path
    """

    def __init__(self, resolver, image_dir, image_converter=download_and_convert_to_png):
        self.resolver = resolver
        self.image_dir = image_dir
        self.image_converter = image_converter

    def transform(self, page, mapping, default_year=None):
        """
        Transform one scraped page.

        Args:
            page: ScrapedPage
            mapping: DomainMapping of the page's domain
            default_year: Year used when the page has no year selector value

        Returns:
            dict: canonical record with a verifyManually list
        """
        record = self.resolver.resolve_record(mapping, page.raw)
        self._add_identity_fields(record, page, mapping, default_year)

        self._add_floor_plan(record, page)

        if record.get(AWNING_LENGTH_FIELD):
            awnings = split_awning_measurements(str(record[AWNING_LENGTH_FIELD]))
            if awnings:
                record[AWNING_LENGTH_FIELD] = awnings

        try:
            add_missing_gvwr_uvw_ccc(record)
        except InvalidTypeError as e:
            log_warning(f"Could not compute weights for {page.url}", str(e))

        if TIRE_CODE_FIELD in record:
            tire = parse_tire_code(record[TIRE_CODE_FIELD])
            # An unparseable code leaves any scraped diameters in place
            for field, parsed in (
                (REAR_TIRE_DIAMETER_FIELD, tire.tire_diameter_in),
                (REAR_WHEEL_DIAMETER_FIELD, tire.wheel_diameter_in),
            ):
                if parsed is not None:
                    record[field] = parsed
                else:
                    record.setdefault(field, None)

        for key in list(record):
            try:
                record[key] = format_value(key, record[key])
            except (InvalidFormatError, InvalidTypeError) as e:
                log_warning(f'Could not format "{key}" for {page.url}', str(e))
                record[key] = None

        # Formatting can rewrite Year, so Name is built from the final values
        record[NAME_FIELD] = build_name(record)

        record[VERIFY_MANUALLY_KEY] = [key for key, value in record.items() if value is None]

        log_stage(
            "transform",
            f"{record[NAME_FIELD]}: {len(record) - 1} fields, "
            f"{len(record[VERIFY_MANUALLY_KEY])} to verify manually",
        )
        return record

    def _add_identity_fields(self, record, page, mapping, default_year):
        record[URL_FIELD] = page.url
        record[YEAR_FIELD] = _first_present(page.year, record.get(YEAR_FIELD), default_year)
        record[MAKE_FIELD] = _first_present(page.make, mapping.make, record.get(MAKE_FIELD))
        record[TYPE_FIELD] = _first_present(
            page.type, record.get(TYPE_FIELD), get_rv_type_from_url(page.url)
        )
        record[MODEL_FIELD] = _first_present(page.model, record.get(MODEL_FIELD))
        record[TRIM_FIELD] = _first_present(
            page.trim, record.get(TRIM_FIELD), get_last_url_segment(page.url)
        )
        record[NAME_FIELD] = build_name(record)

        if page.description:
            record[DESCRIPTION_FIELD] = page.description
        if page.web_features:
            record[WEB_FEATURES_FIELD] = page.web_features

    def _add_floor_plan(self, record, page):
        if not page.image_url:
            log_warning(f"No floor plan image found for {page.url}")
            record[FLOOR_PLAN_FIELD] = None
            return

        base_name = floor_plan_base_name(record, page.url)
        try:
            saved_path = self.image_converter(page.image_url, base_name, self.image_dir)
        except ImageConversionError as e:
            log_warning(f"Floor plan image failed for {page.url}", str(e))
            record[FLOOR_PLAN_FIELD] = None
            return

        # The form upload looks the file up as <Floor plan>.png in the image folder
        record[FLOOR_PLAN_FIELD] = Path(saved_path).stem
        log_stage("image", f"Saved floor plan {saved_path}")

"""
RV Spec Scraper Package

Scrapes trim spec pages from RV manufacturer sites and normalizes them into
one standardized schema, ready for entry into the RV database form.

Each site's labels ("UVW", "Exterior Length", ...) are mapped to standardized
field names once per domain, with the operator asked only about labels never
seen before. Values are converted to the field's unit (inches, gallons, BTU,
...), and missing weights and tire dimensions are derived.

Outputs:
- <make>.json per manufacturer (JSON array of records)
- Floor plan PNGs
- data/domain-mappings.json (learned selectors and key mappings)

Usage:
    python -m rvscraper.run_scraper --url-file urls.txt --year 2024
    python -m rvscraper.run_with_restart --url-file urls.txt --year 2024
    python -m rvscraper.autopopulate output/grand-design.json
"""

from .config import (
    STANDARDIZED_SCHEMA,
    SCRAPER_SETTINGS,
    get_settings,
)
from .resolver import KeyResolver
from .store import DomainMapping, DomainMappingStore, SynonymDictionary
from .transformer import RecordTransformer
from .rv_scraper import scrape_rv_data

__all__ = [
    "STANDARDIZED_SCHEMA",
    "SCRAPER_SETTINGS",
    "get_settings",
    "KeyResolver",
    "DomainMapping",
    "DomainMappingStore",
    "SynonymDictionary",
    "RecordTransformer",
    "scrape_rv_data",
]

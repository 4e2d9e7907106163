"""
Exception types for the RV scraper.

Format and type errors are per-field; schema and persistence errors stop the run.
"""


class RVScraperError(Exception):
    """Base class for scraper errors."""


class InvalidTypeError(RVScraperError, ValueError):
    """A converter received a value of a type it cannot handle."""


class InvalidFormatError(RVScraperError, ValueError):
    """A converter received a string it cannot parse."""


class UnknownFormatTypeError(RVScraperError):
    """A field has no known unit tag. Indicates schema/code drift."""

    def __init__(self, key, unit_tag=None):
        self.key = key
        self.unit_tag = unit_tag
        super().__init__(f"Unknown formatting type: {unit_tag} for key: {key}")


class MappingPersistError(RVScraperError):
    """Writing the domain mapping store failed. Fatal for the run."""


class ImageConversionError(RVScraperError):
    """Fetching, writing or converting a floor plan image failed."""


class NavigationError(RVScraperError):
    """A page could not be loaded."""

"""
Scrape collaborator: turns one manufacturer trim page into a ScrapedPage.

Everything here is site-agnostic; which elements to read comes from the
domain's DomainMapping selectors.
"""

import urllib.parse

from pydantic import BaseModel, Field
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By

from .config import DEFAULT_ROW_SELECTOR
from .errors import NavigationError
from .logging import log_stage
from .strategies import apply_strategy
from .utils.driver_utils import find_first, is_valid_url, safe_get_attribute, safe_get_text, safe_navigate

# Value recorded for each standard-option list item, e.g. "Outside Shower" -> "Yes"
OPTION_PRESENT_VALUE = "Yes"


class ScrapedPage(BaseModel):
    """Raw key/value table plus the context values read by selector (each nullable)."""
    url: str
    raw: dict[str, str] = Field(default_factory=dict)
    make: str | None = None
    year: str | None = None
    type: str | None = None
    model: str | None = None
    trim: str | None = None
    description: str | None = None
    web_features: str | None = None
    image_url: str | None = None


def second_level_domain(url):
    """
    Registrable name of a URL's host, used to key domain mappings.

    "https://www.granddesignrv.com/travel-trailers/imagine" -> "granddesignrv"
    """
    if not is_valid_url(url):
        raise ValueError(f"Invalid URL: {url!r}")
    hostname = urllib.parse.urlparse(url).hostname or ""
    parts = hostname.split(".")
    return parts[-2] if len(parts) >= 2 else parts[0]


def _add_pair(raw, key, value):
    key = " ".join(key.split())
    if key and key not in raw:
        raw[key] = value.strip()


def _cells(row):
    try:
        cells = row.find_elements(By.CSS_SELECTOR, "td, th")
    except StaleElementReferenceException:
        return []
    return cells


def extract_raw_record(driver, mapping):
    """
    Collect raw key/value pairs from the page.

    Sources, in order (first value for a key wins):
        - table rows (rowSelector, default "tbody tr"): first cell is the key,
          second the value
        - description lists (dlSelector): dt/dd pairs
        - standard option lists (optionsSelector): each item is a key marked "Yes"
    """
    raw = {}

    for row in driver.find_elements(By.CSS_SELECTOR, mapping.row_selector or DEFAULT_ROW_SELECTOR):
        cells = _cells(row)
        if len(cells) >= 2:
            _add_pair(raw, safe_get_text(cells[0]), safe_get_text(cells[1]))

    if mapping.dl_selector:
        for dl in driver.find_elements(By.CSS_SELECTOR, mapping.dl_selector):
            terms = dl.find_elements(By.CSS_SELECTOR, "dt")
            definitions = dl.find_elements(By.CSS_SELECTOR, "dd")
            for term, definition in zip(terms, definitions):
                _add_pair(raw, safe_get_text(term), safe_get_text(definition))

    if mapping.options_selector:
        for option in driver.find_elements(By.CSS_SELECTOR, mapping.options_selector):
            _add_pair(raw, safe_get_text(option), OPTION_PRESENT_VALUE)

    return raw


def _selector_text(driver, selector, strategy=None):
    element = find_first(driver, selector)
    if element is None:
        return None
    text = apply_strategy(strategy, element)
    return text or None


def scrape_page(driver, url, mapping):
    """
    Navigate to a trim page and read everything the transformer needs.

    Args:
        driver: Selenium WebDriver instance
        url: trim page URL
        mapping: DomainMapping for the URL's domain

    Returns:
        ScrapedPage

    Raises:
        NavigationError: if the page doesn't load
    """
    wait_selector = mapping.row_selector or mapping.dl_selector or "table"
    if not safe_navigate(driver, url, wait_selector=wait_selector):
        raise NavigationError(f"Failed to load {url}")

    raw = extract_raw_record(driver, mapping)

    image_url = None
    image_element = find_first(driver, mapping.image_selector)
    if image_element is not None:
        image_url = safe_get_attribute(image_element, "src") or safe_get_attribute(image_element, "href") or None

    page = ScrapedPage(
        url=url,
        raw=raw,
        make=_selector_text(driver, mapping.make_selector),
        year=_selector_text(driver, mapping.year_selector),
        type=_selector_text(driver, mapping.type_selector),
        model=_selector_text(driver, mapping.model_selector, mapping.model_strategy),
        trim=_selector_text(driver, mapping.trim_selector),
        description=_selector_text(driver, mapping.description_selector),
        web_features=_selector_text(driver, mapping.web_features_selector, mapping.web_features_strategy),
        image_url=image_url,
    )

    log_stage("scrape", f"Found {len(raw)} raw keys on {url}")
    return page

"""
Named text-extraction strategies for page elements.

Some sites need more than an element's text for a field (the model name is the
first line of a heading, web features are list items, ...). A domain mapping
names one of these functions instead of carrying code of its own.
"""

from selenium.webdriver.common.by import By

from .utils.driver_utils import safe_get_attribute, safe_get_text


def _text(element):
    return safe_get_text(element)


def _first_line(element):
    lines = [line.strip() for line in safe_get_text(element).splitlines() if line.strip()]
    return lines[0] if lines else ""


def _last_line(element):
    lines = [line.strip() for line in safe_get_text(element).splitlines() if line.strip()]
    return lines[-1] if lines else ""


def _title_case(element):
    return to_title_case(safe_get_text(element))


def _list_items(element):
    items = [safe_get_text(li) for li in element.find_elements(By.CSS_SELECTOR, "li")]
    items = [item for item in items if item]
    return "; ".join(items) if items else safe_get_text(element)


def _src(element):
    return safe_get_attribute(element, "src")


def _href(element):
    return safe_get_attribute(element, "href")


def _alt(element):
    return safe_get_attribute(element, "alt")


EXTRACTION_STRATEGIES = {
    "text": _text,
    "first_line": _first_line,
    "last_line": _last_line,
    "title_case": _title_case,
    "list_items": _list_items,
    "src": _src,
    "href": _href,
    "alt": _alt,
}


def apply_strategy(name, element):
    """Run a registered strategy on an element (plain text if name is None)."""
    if name is None:
        return _text(element)
    if name not in EXTRACTION_STRATEGIES:
        raise ValueError(f"Unknown extraction strategy: {name}")
    return EXTRACTION_STRATEGIES[name](element)


def to_title_case(text):
    """Capitalize the first letter of each word: "imagine xls" -> "Imagine Xls"."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))

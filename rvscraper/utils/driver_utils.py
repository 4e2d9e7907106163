"""
Selenium WebDriver utilities for safe navigation and element handling.
"""

import random
import time
import urllib.parse

from selenium import webdriver
from selenium.common.exceptions import (
    InvalidSelectorException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..config import SCRAPER_SETTINGS

DESKTOP_USER_AGENTS = [
    # Chrome on Mac
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    # Chrome on Windows
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    # Firefox on Windows
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
    # Safari on Mac
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
    # Chrome on Linux
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
]


def get_random_user_agent():
    """Get a random desktop user agent (manufacturer sites serve different markup to mobile)."""
    return random.choice(DESKTOP_USER_AGENTS)


CHROME_ARGUMENTS = [
    "--no-sandbox",
    "--window-size=1920,1080",
    "--disable-blink-features=AutomationControlled",
]


def setup_driver(headless=True, rotate_user_agent=True):
    """
    Start Chrome for scraping or form entry.

    Spec tables are often filled in by JavaScript, so pages load with the
    "normal" strategy and callers wait on a selector afterwards.

    Args:
        headless: Run without a window (autopopulate runs visible so each form can be checked)
        rotate_user_agent: Pick a random desktop user agent

    Returns:
        webdriver.Chrome
    """
    chrome_options = Options()
    for argument in CHROME_ARGUMENTS:
        chrome_options.add_argument(argument)

    if rotate_user_agent:
        chrome_options.add_argument(f"--user-agent={get_random_user_agent()}")

    if headless:
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--disable-gpu")

    chrome_options.page_load_strategy = SCRAPER_SETTINGS["page_load_strategy"]
    chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])

    driver = webdriver.Chrome(options=chrome_options)
    driver.set_page_load_timeout(SCRAPER_SETTINGS["page_load_timeout"])
    driver.set_script_timeout(SCRAPER_SETTINGS["script_timeout"])
    return driver


def random_delay(min_seconds=1, max_seconds=3):
    """Add a random delay to simulate human behavior."""
    delay = random.uniform(min_seconds, max_seconds)
    time.sleep(delay)
    return delay


def is_valid_url(url):
    """Check that a URL has a scheme and a host."""
    try:
        parsed_url = urllib.parse.urlparse(url)
    except (TypeError, ValueError):
        return False
    return bool(parsed_url.scheme in ("http", "https") and parsed_url.netloc)


def _wait_for_page(driver, wait_selector):
    """True once the document is complete and wait_selector (if any) matches."""
    WebDriverWait(driver, SCRAPER_SETTINGS["page_load_timeout"]).until(
        lambda d: d.execute_script("return document.readyState") == "complete"
    )
    if not wait_selector:
        return True
    try:
        WebDriverWait(driver, SCRAPER_SETTINGS["element_timeout"]).until(
            EC.presence_of_element_located((By.CSS_SELECTOR, wait_selector))
        )
        return True
    except TimeoutException:
        return bool(driver.find_elements(By.CSS_SELECTOR, wait_selector))


def safe_navigate(driver, url, wait_selector=None, max_retries=None, add_delay=True):
    """
    Load a page, retrying with exponential backoff.

    Args:
        driver: Selenium WebDriver instance
        url: URL to load
        wait_selector: CSS selector that must be present, e.g. the spec table rows
        max_retries: Attempts before giving up (default: SCRAPER_SETTINGS["max_retries"])
        add_delay: Pause a random moment first

    Returns:
        bool: True if the page (and wait_selector) loaded
    """
    if max_retries is None:
        max_retries = SCRAPER_SETTINGS["max_retries"]

    if add_delay:
        random_delay(*SCRAPER_SETTINGS["delay_before_navigate"])

    for attempt in range(1, max_retries + 1):
        try:
            driver.get(url)
            if _wait_for_page(driver, wait_selector):
                return True
            print(f"  {wait_selector!r} not found on {url} (attempt {attempt}/{max_retries})")
        except WebDriverException as e:
            print(f"Navigation error (attempt {attempt}/{max_retries}): {e}")

        if attempt < max_retries:
            time.sleep(SCRAPER_SETTINGS["retry_backoff"] * (2 ** (attempt - 1)))

    return False


def find_first(context, selector):
    """First element matching a CSS selector under a driver or element, or None."""
    if not selector:
        return None
    try:
        elements = context.find_elements(By.CSS_SELECTOR, selector)
    except (InvalidSelectorException, StaleElementReferenceException):
        return None
    return elements[0] if elements else None


def safe_get_text(element):
    """Safely get text from an element (textContent when the element is hidden)."""
    try:
        if not element:
            return ""
        text = element.text.strip()
        if not text:
            text = (element.get_attribute("textContent") or "").strip()
        return text
    except StaleElementReferenceException:
        return ""


def safe_get_attribute(element, attribute):
    """Safely get attribute from an element."""
    try:
        return element.get_attribute(attribute) if element else ""
    except StaleElementReferenceException:
        return ""

"""
Pipeline driver: URLs in, one JSON file per manufacturer out.

Pages are processed one at a time. Key resolution may stop to ask the operator
a question, and the learned answers are shared state, so there is no parallel
scraping here (link discovery in link_extractor is the parallel part).
"""

import random
import time

from selenium.common.exceptions import WebDriverException

from .config import (
    FLOOR_PLAN_FIELD,
    MAKE_FIELD,
    NAME_FIELD,
    SCRAPER_SETTINGS,
    TYPE_FIELD,
    URL_FIELD,
    VERIFY_MANUALLY_KEY,
    YEAR_FIELD,
)
from .errors import NavigationError
from .logging import log_error, log_header, log_progress, log_record, log_run_summary
from .page_scraper import scrape_page, second_level_domain
from .resolver import KeyResolver
from .transformer import RecordTransformer
from .utils import setup_driver
from .utils.file_utils import append_record, output_path_for_make, repair_brackets

SUMMARY_FIELDS = [NAME_FIELD, URL_FIELD, YEAR_FIELD, TYPE_FIELD, FLOOR_PLAN_FIELD, VERIFY_MANUALLY_KEY]


def gentle_delay(delay_setting):
    """
    Apply a random delay from a tuple range or fixed value.

    Args:
        delay_setting: Either a tuple (min, max) or a single number
    """
    if isinstance(delay_setting, tuple):
        delay = random.uniform(delay_setting[0], delay_setting[1])
    else:
        delay = delay_setting
    time.sleep(delay)
    return delay


def scrape_rv_data(
    urls,
    default_year,
    store,
    synonyms,
    prompter,
    output_dir,
    image_dir,
    driver=None,
    backup_dir=None,
    transformer=None,
):
    """
    Scrape, normalize and save every URL.

    Args:
        urls: trim page URLs, processed in order
        default_year: Year for pages without a year selector
        store: DomainMappingStore (persisted after every record)
        synonyms: SynonymDictionary
        prompter: Prompter for new domains and unresolved keys
        output_dir: folder for <make>.json files
        image_dir: folder for floor plan PNGs
        driver: WebDriver to reuse (a headless one is created and closed otherwise)
        backup_dir: if set, mapping files are copied here before the run
        transformer: RecordTransformer override (tests)

    Returns:
        dict: {"records": n, "failed": n, "files": [paths]}

    Raises:
        MappingPersistError, UnknownFormatTypeError, OSError: stop the run
    """
    if backup_dir:
        store.backup(backup_dir, extra_files=[synonyms.path])

    if transformer is None:
        resolver = KeyResolver(store, synonyms, prompter)
        transformer = RecordTransformer(resolver, image_dir)

    own_driver = driver is None
    if own_driver:
        driver = setup_driver()

    log_header(f"RV Spec Scraper - {len(urls)} URLs")

    failed_urls = []
    output_files = []
    saved = 0

    try:
        for index, url in enumerate(urls, 1):
            try:
                domain = second_level_domain(url)
                mapping = store.get_or_create_mapping(domain, prompter)
                page = scrape_page(driver, url, mapping)
                record = transformer.transform(page, mapping, default_year)
            except (NavigationError, WebDriverException, ValueError) as e:
                log_error(f"Failed to process {url}", e)
                failed_urls.append(url)
                continue

            output_file = output_path_for_make(output_dir, record.get(MAKE_FIELD))
            append_record(output_file, record)
            if output_file not in output_files:
                output_files.append(output_file)

            store.persist()
            saved += 1
            log_progress(index, len(urls), url)
            log_record(record, SUMMARY_FIELDS)

            if index < len(urls):
                gentle_delay(SCRAPER_SETTINGS["delay_between_pages"])
    finally:
        for output_file in output_files:
            repair_brackets(output_file)
        if own_driver:
            driver.quit()

    totals = {
        "records": saved,
        "failed": len(failed_urls),
        "files": [str(path) for path in output_files],
    }
    log_run_summary(totals, failed_urls)
    return totals

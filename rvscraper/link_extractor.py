"""
Link discovery: collect trim page URLs from model/series listing pages.

Input maps a link selector to the listing pages it applies to, e.g.

    {
        "div.specCell.button-specCell-desktop > a": [
            "https://www.granddesignrv.com/travel-trailers/imagine",
            "https://www.granddesignrv.com/fifth-wheels/solitude",
        ],
    }

Listing pages are independent, so they are fetched in parallel with a bounded
number of workers, one browser each. The result is a URL file for
run_scraper --url-file.

Usage:
    python -m rvscraper.link_extractor listings.json --output grand-design.txt
"""

import sys
import json
import argparse
from concurrent.futures import ThreadPoolExecutor, as_completed

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from .config import SCRAPER_SETTINGS
from .logging import log_error, log_header
from .utils import safe_get_attribute, safe_navigate, setup_driver


def extract_links(driver, url, selector):
    """href of every element matching selector on one page."""
    if not safe_navigate(driver, url, wait_selector=selector):
        raise WebDriverException(f"Failed to load {url}")
    links = [safe_get_attribute(a, "href") for a in driver.find_elements(By.CSS_SELECTOR, selector)]
    return [link for link in links if link]


def _extract_worker(url, selector, driver_factory):
    driver = None
    try:
        driver = driver_factory()
        return extract_links(driver, url, selector)
    except WebDriverException as e:
        log_error(f"Error extracting urls for {url}", e)
        return []
    finally:
        if driver:
            driver.quit()


def extract_all_selector_links(urls_by_selector, max_workers=None, driver_factory=setup_driver):
    """
    Collect links from every listing page.

    Args:
        urls_by_selector: dict of link selector -> list of listing page URLs
        max_workers: parallel browsers (default: SCRAPER_SETTINGS["max_workers"])
        driver_factory: callable returning a new WebDriver

    Returns:
        list[str]: links, grouped by selector in input order and by page in
        input order within a group, duplicates removed

    Raises:
        TypeError: if urls_by_selector isn't a dict
    """
    if not isinstance(urls_by_selector, dict):
        raise TypeError("Invalid input: urls_by_selector should be a dict")

    if max_workers is None:
        max_workers = SCRAPER_SETTINGS["max_workers"]

    jobs = [
        (selector, url)
        for selector, urls in urls_by_selector.items()
        for url in urls
    ]
    results = {}

    print("Extracting URLs...", end="", flush=True)
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {
            executor.submit(_extract_worker, url, selector, driver_factory): (selector, url)
            for selector, url in jobs
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()
            sys.stdout.write(".")
            sys.stdout.flush()
    print("\n")

    all_links = []
    for job in jobs:
        for link in results.get(job, []):
            if link not in all_links:
                all_links.append(link)
    return all_links


def write_url_file(path, links):
    """One URL per line, the format run_scraper --url-file reads."""
    with open(path, "w", encoding="utf-8") as f:
        for link in links:
            f.write(f"{link}\n")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Collect trim page URLs from listing pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input JSON maps a link selector to listing pages:
    {"div.specCell > a": ["https://www.granddesignrv.com/travel-trailers/imagine"]}
        """
    )
    parser.add_argument("input_file", help="JSON file of selector -> listing page URLs")
    parser.add_argument(
        "--output",
        default="urls.txt",
        help="URL file to write (default: urls.txt)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=SCRAPER_SETTINGS["max_workers"],
        help=f"Parallel browsers (default: {SCRAPER_SETTINGS['max_workers']})"
    )
    args = parser.parse_args(argv)

    with open(args.input_file, "r", encoding="utf-8") as f:
        urls_by_selector = json.load(f)

    log_header(f"Link discovery from {args.input_file}")
    links = extract_all_selector_links(urls_by_selector, max_workers=args.workers)
    write_url_file(args.output, links)
    print(f"Wrote {len(links)} URLs to {args.output}")
    return 0 if links else 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Entry point for running the RV spec scraper.

Usage:
    python -m rvscraper.run_scraper URL [URL ...]            # Scrape trim pages
    python -m rvscraper.run_scraper --url-file urls.txt      # One URL per line
    python -m rvscraper.run_scraper --year 2024 URL          # Year for sites without a year selector
    python -m rvscraper.run_scraper --visible URL            # Watch the browser
"""

import sys
import argparse
from datetime import datetime

from .config import get_settings
from .prompts import Prompter
from .rv_scraper import scrape_rv_data
from .store import DomainMappingStore, SynonymDictionary
from .utils import setup_driver


def read_url_file(path):
    """URLs from a text file, one per line; blank lines and # comments skipped."""
    with open(path, "r", encoding="utf-8") as f:
        lines = [line.strip() for line in f]
    return [line for line in lines if line and not line.startswith("#")]


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Scrape RV trim spec pages into standardized JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m rvscraper.run_scraper https://www.granddesignrv.com/travel-trailers/imagine/2400bh
    python -m rvscraper.run_scraper --url-file grand-design.txt --year 2024
        """
    )

    parser.add_argument(
        "urls",
        nargs="*",
        help="Trim page URLs to scrape"
    )

    parser.add_argument(
        "--url-file",
        default=None,
        help="Text file with one URL per line"
    )

    parser.add_argument(
        "--year",
        default=settings.DEFAULT_YEAR or None,
        help="Model year used when a site has no year selector (default: RV_DEFAULT_YEAR)"
    )

    parser.add_argument(
        "--output-dir",
        default=settings.OUTPUT_DIR,
        help=f"Output directory for JSON files (default: {settings.OUTPUT_DIR})"
    )

    parser.add_argument(
        "--image-dir",
        default=settings.IMAGE_DIR,
        help=f"Output directory for floor plan images (default: {settings.IMAGE_DIR})"
    )

    parser.add_argument(
        "--visible",
        action="store_true",
        help="Run the browser with a window instead of headless"
    )

    args = parser.parse_args(argv)

    urls = list(args.urls)
    if args.url_file:
        urls.extend(read_url_file(args.url_file))
    if not urls:
        parser.error("no URLs given (pass URLs or --url-file)")

    problems = settings.validate()
    if problems:
        for problem in problems:
            print(f"Configuration problem: {problem}")
        return 2

    store = DomainMappingStore.load(settings.DOMAIN_MAPPINGS_FILE)
    synonyms = SynonymDictionary.load(settings.SYNONYMS_FILE)

    print(f"\n{'='*60}")
    print(f"RV Spec Scraper - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"{'='*60}")
    print(f"URLs to scrape: {len(urls)}")
    print(f"Known domains: {', '.join(store.mappings) or 'none'}")
    print(f"Synonyms loaded: {len(synonyms)}")
    print(f"Output directory: {args.output_dir}")
    print(f"Image directory: {args.image_dir}")

    driver = setup_driver(headless=settings.HEADLESS and not args.visible)
    try:
        totals = scrape_rv_data(
            urls,
            args.year,
            store,
            synonyms,
            Prompter(),
            args.output_dir,
            args.image_dir,
            driver=driver,
            backup_dir=settings.BACKUP_DIR,
        )
    finally:
        driver.quit()

    return 1 if totals["failed"] and not totals["records"] else 0


if __name__ == "__main__":
    sys.exit(main())

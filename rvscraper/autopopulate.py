#!/usr/bin/env python3
"""
Enter finished records into the target database form.

For each record the form page is opened and every key is matched to the table
row whose label contains it; text inputs get the value and "Floor plan"
uploads <image_dir>/<Floor plan>.png. Runs with a visible browser so each
entry can be checked by eye.

Keys that are not in the standardized schema, or that have no matching row on
the form, are collected into a discrepancy report rather than dropped.

Usage:
    python -m rvscraper.autopopulate output/grand-design.json
"""

import sys
import argparse
from pathlib import Path

from selenium.webdriver.common.by import By

from .config import FLOOR_PLAN_FIELD, STANDARDIZED_SCHEMA, VERIFY_MANUALLY_KEY, get_settings
from .errors import NavigationError
from .logging import log_error, log_header, log_warning
from .prompts import Prompter
from .utils import find_first, safe_get_text, safe_navigate, setup_driver
from .utils.file_utils import read_records

FLOOR_PLAN_INPUT_SELECTOR = "input[name=floor_plan][type=file]"
TEXT_INPUT_SELECTOR = 'input[type="text"]'


def find_unknown_keys(record):
    """Keys of a record that are not standardized field names."""
    return [
        key for key in record
        if key != VERIFY_MANUALLY_KEY and key not in STANDARDIZED_SCHEMA
    ]


def find_row_for_key(driver, key):
    """First table row with a cell whose text contains key, or None."""
    for row in driver.find_elements(By.TAG_NAME, "tr"):
        for cell in row.find_elements(By.TAG_NAME, "td"):
            if key in safe_get_text(cell):
                return row
    return None


def fill_row(row, key, value, image_dir):
    """
    Put one value into a form row.

    Returns:
        str | None: problem description, or None on success
    """
    if key == FLOOR_PLAN_FIELD:
        file_input = find_first(row, FLOOR_PLAN_INPUT_SELECTOR)
        if file_input is None:
            return "no file input in floor plan row"
        file_path = (Path(image_dir) / f"{value}.png").resolve()
        if not file_path.exists():
            return f"file does not exist: {file_path}"
        file_input.send_keys(str(file_path))
        return None

    text_input = find_first(row, TEXT_INPUT_SELECTOR)
    if text_input is None:
        return "no text input in row"
    text_input.clear()
    text_input.send_keys(str(value))
    return None


def populate_record(driver, record, form_page_url, image_dir):
    """
    Fill the form for one record.

    Returns:
        dict: {"unknown_keys": [...], "missing_on_form": [...], "problems": {key: message}}
    """
    report = {"unknown_keys": find_unknown_keys(record), "missing_on_form": [], "problems": {}}

    if not safe_navigate(driver, form_page_url, wait_selector="tr", add_delay=False):
        raise NavigationError(f"Failed to load form page {form_page_url}")

    for key, value in record.items():
        if key == VERIFY_MANUALLY_KEY or value is None:
            continue

        row = find_row_for_key(driver, key)
        if row is None:
            log_warning(f"Key {key} not found on the page.")
            report["missing_on_form"].append(key)
            continue

        problem = fill_row(row, key, value, image_dir)
        if problem:
            log_warning(f"{key}: {problem}")
            report["problems"][key] = problem

    return report


def autopopulate(input_file, form_page_url, image_dir, driver=None, prompter=None):
    """
    Enter every record of an output file into the form, one browser tab each.

    With a prompter, a record with discrepancies pauses the run and the
    operator decides whether to go on.

    Returns:
        list[dict]: one discrepancy report per record, with its Name
    """
    records = read_records(input_file)

    own_driver = driver is None
    if own_driver:
        driver = setup_driver(headless=False, rotate_user_agent=False)

    log_header(f"Autopopulating {len(records)} records from {input_file}")

    reports = []
    try:
        for index, record in enumerate(records):
            if index > 0:
                driver.switch_to.new_window("tab")
            report = populate_record(driver, record, form_page_url, image_dir)
            report["name"] = record.get("Name")
            reports.append(report)

            if report["unknown_keys"]:
                log_warning(f"{report['name']}: keys not in the standardized schema", report["unknown_keys"])

            has_discrepancy = report["unknown_keys"] or report["missing_on_form"] or report["problems"]
            if prompter and has_discrepancy and not prompter.confirm_continue():
                log_warning(f"Stopped after {len(reports)} of {len(records)} records")
                break
    finally:
        if own_driver:
            input("Check the entries, then press Enter to close the browser...")
            driver.quit()

    return reports


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Enter scraped RV records into the database form")
    parser.add_argument("input_file", help="JSON output file, e.g. output/grand-design.json")
    parser.add_argument(
        "--form-url",
        default=settings.FORM_PAGE_URL,
        help="Form page URL (default: RV_FORM_PAGE_URL)"
    )
    parser.add_argument(
        "--image-dir",
        default=settings.IMAGE_DIR,
        help=f"Floor plan image folder (default: {settings.IMAGE_DIR})"
    )
    args = parser.parse_args(argv)

    if not args.form_url:
        log_error("No form page URL: pass --form-url or set RV_FORM_PAGE_URL")
        return 2

    reports = autopopulate(args.input_file, args.form_url, args.image_dir, prompter=Prompter())
    discrepancies = [r for r in reports if r["unknown_keys"] or r["missing_on_form"] or r["problems"]]
    print(f"\n{len(reports)} records entered, {len(discrepancies)} with discrepancies")
    return 0


if __name__ == "__main__":
    sys.exit(main())

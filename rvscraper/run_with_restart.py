#!/usr/bin/env python3
"""
Restart wrapper for long unattended scrapes.

Runs rvscraper.run_scraper in a child process and starts it again if it exits
with a non-zero code, up to SCRAPER_SETTINGS["max_restart_attempts"] times.
Domain mappings are persisted after every record, so a restarted run never
re-asks an answered question.

Usage:
    python -m rvscraper.run_with_restart --url-file urls.txt --year 2024
"""

import subprocess
import sys
import time

from .config import SCRAPER_SETTINGS
from .logging import log_error, log_warning


def run_scraper_once(args):
    """Run the scraper CLI once. Returns its exit code."""
    command = [sys.executable, "-m", "rvscraper.run_scraper", *args]
    return subprocess.run(command).returncode


def start_scraping_with_restart(args, max_attempts=None, restart_delay=None, runner=run_scraper_once):
    """
    Run the scraper until it succeeds or the restart ceiling is hit.

    Returns:
        int: 0 on success, otherwise the last exit code
    """
    if max_attempts is None:
        max_attempts = SCRAPER_SETTINGS["max_restart_attempts"]
    if restart_delay is None:
        restart_delay = SCRAPER_SETTINGS["restart_delay"]

    exit_code = 1
    for attempt in range(1, max_attempts + 1):
        exit_code = runner(args)
        if exit_code == 0:
            return 0

        log_warning(f"Scraper exited with code {exit_code} (attempt {attempt}/{max_attempts})")
        if attempt < max_attempts:
            print("Restarting...")
            time.sleep(restart_delay)

    log_error("Max restart attempts reached. Exiting...")
    return exit_code


def main():
    return start_scraping_with_restart(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())

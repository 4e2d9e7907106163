"""
Console logging for scraper runs.

Colored, timestamped output so a human watching a long batch can tell stages,
decisions and failures apart at a glance.
"""
import json
from datetime import datetime
from typing import Any

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    # Stage colors
    "scrape": "\033[94m",     # Blue
    "resolve": "\033[95m",    # Magenta
    "transform": "\033[96m",  # Cyan
    "image": "\033[93m",      # Yellow
    "output": "\033[92m",     # Green
    # Status colors
    "success": "\033[92m",
    "error": "\033[91m",
    "warning": "\033[93m",
    "info": "\033[97m",
}


def _colorize(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def _timestamp() -> str:
    """Get current timestamp."""
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def _format_value(value: Any, max_length: int = 200) -> str:
    """Format a value for display, truncating if necessary."""
    if value is None:
        return "None"

    if isinstance(value, (dict, list)):
        try:
            formatted = json.dumps(value, indent=2, default=str)
        except (TypeError, ValueError):
            formatted = str(value)
    else:
        formatted = str(value)

    if len(formatted) > max_length:
        return formatted[:max_length] + "..."
    return formatted


def log_header(title: str):
    """Log a section header."""
    print(f"\n{'='*60}")
    print(_colorize(f"  {title}", "bold"))
    print(f"{'='*60}")


def log_stage(stage: str, message: str):
    """Log a pipeline stage event (scrape, resolve, transform, image, output)."""
    color = stage.lower() if stage.lower() in COLORS else "info"
    print(f"{_timestamp()} {_colorize(f'[{stage.upper()}]', color)} {message}")


def log_decision(decision: str, reason: str = None):
    """Log a key-resolution decision."""
    print(f"  {_colorize('→ Decision:', 'bold')} {decision}")
    if reason:
        print(f"    Reason: {_colorize(reason, 'dim')}")


def log_warning(message: str, detail: Any = None):
    """Log a recoverable anomaly."""
    print(f"{_timestamp()} {_colorize('[WARNING]', 'warning')} {message}")
    if detail is not None:
        print(f"  {_format_value(detail)}")


def log_error(message: str, exception: Exception = None):
    """Log an error."""
    print(f"{_timestamp()} {_colorize('[ERROR]', 'error')} {message}")
    if exception:
        print(f"  Exception: {_colorize(str(exception), 'error')}")


def log_progress(index: int, total: int, url: str):
    """Log that a record was written."""
    counter = _colorize(f"{index} of {total}", "success")
    print(f"{_timestamp()} Scraped and saved data for {counter}: {url}")


def log_record(record: dict, key_fields: list[str] = None):
    """Log the interesting fields of a finished record."""
    fields = key_fields or list(record.keys())
    for field in fields:
        if field in record:
            print(f"  {field}: {_format_value(record[field], 120)}")


def log_run_summary(totals: dict, failed_urls: list[str]):
    """Log the end-of-run summary, listing every failed URL."""
    log_header("Scraping complete!")
    for key, value in totals.items():
        print(f"  {key}: {value}")

    if failed_urls:
        print(f"\n{_colorize(f'Failed URLs ({len(failed_urls)}):', 'error')}")
        for url in failed_urls:
            print(f"  - {url}")
    else:
        print(f"\n{_colorize('No failed URLs', 'success')}")
    print(f"{'='*60}\n")

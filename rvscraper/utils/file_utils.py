"""
File I/O utilities for saving scraped records.

Output is one JSON array per manufacturer, appended to one record at a time so
a long batch keeps its progress if it dies. An interrupted array is closed
again by repair_brackets().
"""

import json
import re
import shutil
from pathlib import Path


def ensure_output_dir(output_dir):
    """Create output directory if it doesn't exist."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def make_slug(make):
    """ "Grand Design" -> "grand-design" """
    return re.sub(r"\s+", "-", make.strip().lower())


def output_path_for_make(output_dir, make):
    """Path of the per-manufacturer output file, e.g. output/grand-design.json."""
    return ensure_output_dir(output_dir) / f"{make_slug(make or 'unknown')}.json"


def append_record(filepath, record):
    """
    Append one record to a JSON array file.

    A new or empty file gets the opening "[". A file closed by an earlier run
    has its "]" removed so the array continues. The closing bracket is written
    by repair_brackets() at the end of the run.

    Raises:
        OSError: write failures are not swallowed
    """
    filepath = Path(filepath)
    text = json.dumps(record, indent=4, ensure_ascii=False)

    existing = filepath.read_text(encoding="utf-8").rstrip() if filepath.exists() else ""

    if not existing or existing == "[":
        filepath.write_text("[" + text, encoding="utf-8")
        return

    if existing.endswith("]"):
        existing = existing[:-1].rstrip()
        if existing == "[":
            filepath.write_text("[" + text, encoding="utf-8")
            return
        filepath.write_text(existing, encoding="utf-8")

    with open(filepath, "a", encoding="utf-8") as f:
        if not existing.endswith(","):
            f.write(",")
        f.write(text)


def repair_brackets(filepath):
    """
    Make sure a record file is a closed JSON array.

    Prepends "[" if missing, drops a trailing comma, appends "]" if missing.
    Safe to run any number of times.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return

    data = filepath.read_text(encoding="utf-8").strip()

    if not data.startswith("["):
        data = "[" + data
    if data.endswith(","):
        data = data[:-1]
    if not data.endswith("]"):
        data = data + "]"

    filepath.write_text(data, encoding="utf-8")


def read_records(filepath):
    """Read a record file, repairing its brackets first."""
    repair_brackets(filepath)
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


def backup_file(filepath, backup_dir="backups"):
    """
    Copy a file into a backup folder (created if needed).

    Raises:
        FileNotFoundError: if the file doesn't exist
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    backup_path = ensure_output_dir(backup_dir) / filepath.name
    shutil.copyfile(filepath, backup_path)
    print(f"Backup of {filepath.name} completed to {backup_path}")
    return backup_path


def map_field_in_file(filepath, key, func):
    """
    Apply func to one key of every record in a record file, keeping a .bak copy.

    Useful for fixing a field across a finished file without re-scraping,
    e.g. map_field_in_file("output/grand-design.json", "Year", int).
    """
    if not isinstance(key, str):
        raise TypeError("key needs to be a string")
    if not callable(func):
        raise TypeError("func needs to be callable")

    filepath = Path(filepath)
    records = read_records(filepath)

    try:
        for record in records:
            record[key] = func(record.get(key))
    except Exception as e:
        raise ValueError(f"Error editing {key} in {filepath}: {e}") from e

    shutil.copyfile(filepath, filepath.with_name(filepath.name + ".bak"))
    filepath.write_text(json.dumps(records, indent=4, ensure_ascii=False), encoding="utf-8")
    return len(records)

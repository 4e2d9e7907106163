"""Utility modules for the RV spec scraper."""

from .driver_utils import (
    setup_driver,
    safe_navigate,
    find_first,
    safe_get_text,
    safe_get_attribute,
    is_valid_url,
    random_delay,
)
from .file_utils import (
    ensure_output_dir,
    output_path_for_make,
    append_record,
    repair_brackets,
    read_records,
    backup_file,
    map_field_in_file,
)
from .image_utils import download_and_convert_to_png

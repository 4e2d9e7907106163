"""
Floor plan image download and PNG conversion.

The target form only accepts PNG uploads, so every floor plan is saved as
<base>-<n>.png in the image folder. Existing files are never overwritten;
the numeric suffix is bumped until a free name is found.
"""

import os
import urllib.parse
from pathlib import Path

import requests
from PIL import Image, UnidentifiedImageError

from ..config import SCRAPER_SETTINGS
from ..errors import ImageConversionError
from .file_utils import ensure_output_dir


def _extension_from_url(url):
    """".jpg" for https://site.com/fp/2400bh.JPG?v=3; ".png" if the path has none."""
    path = urllib.parse.urlparse(url).path
    return os.path.splitext(path)[1].lower() or ".png"


def next_free_path(output_dir, base_name, ext, start=0):
    """
    First <base_name>-<n><ext> in output_dir that doesn't exist yet, n >= start.

    Returns:
        tuple[Path, int]: the path and the n that was used
    """
    n = start
    while True:
        candidate = Path(output_dir) / f"{base_name}-{n}{ext}"
        if not candidate.exists():
            return candidate, n
        n += 1


def _write_stream(response, save_path):
    try:
        with open(save_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
    except OSError as e:
        raise ImageConversionError(f"Failed to write original image {save_path}: {e}") from e


def download_and_convert_to_png(source_url, desired_base_name, output_dir, session=None):
    """
    Download an image and make sure it ends up as a PNG.

    Args:
        source_url: image URL scraped from the page
        desired_base_name: file name without extension, e.g. "Imagine__2400BH"
            ("-" is reserved for the numeric suffix and becomes "_")
        output_dir: folder to save into (created if needed)
        session: optional requests.Session

    Returns:
        str: path of the saved PNG

    Raises:
        ImageConversionError: fetch, write, convert or cleanup failed
    """
    if not source_url:
        raise ImageConversionError("No image URL to download")

    base_name = desired_base_name.replace("-", "_")
    ext = _extension_from_url(source_url)

    try:
        output_dir = ensure_output_dir(output_dir)
    except OSError as e:
        raise ImageConversionError(f"Error while making image output folder: {e}") from e

    http = session or requests
    save_path, n = next_free_path(output_dir, base_name, ext)
    try:
        with http.get(source_url, stream=True, timeout=SCRAPER_SETTINGS["image_timeout"]) as response:
            response.raise_for_status()
            _write_stream(response, save_path)
    except requests.exceptions.RequestException as e:
        raise ImageConversionError(f"Failed to fetch image {source_url}: {e}") from e

    if ext == ".png":
        return str(save_path)

    png_path, _ = next_free_path(output_dir, base_name, ".png", start=n)
    try:
        with Image.open(save_path) as image:
            if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
                image = image.convert("RGBA")
            image.save(png_path, format="PNG")
    except (OSError, UnidentifiedImageError) as e:
        raise ImageConversionError(f"Error converting image to PNG: {e}") from e

    try:
        os.remove(save_path)
    except OSError as e:
        raise ImageConversionError(f"Error deleting original image {save_path}: {e}") from e

    return str(png_path)

"""Helpers that turn stored image paths into absolute URLs.

Images are persisted either as absolute URLs (CDN or previously absolutized
values) or as paths relative to the uploads directory, with or without a
leading slash and with or without the uploads segment. Responses always carry
absolute URLs when a base URL is known.
"""

import re
from typing import Any, Optional

from .config import settings

_DOUBLE_PREFIXED = re.compile(r"/uploads/(https?://[^/]+/uploads/.+)")


def get_image_url(filename: Optional[str], base_url: Optional[str] = None) -> str:
    """
    Build the public URL of an uploaded file.

    Args:
        filename: Stored path, e.g. ``"kerala.jpg"``, ``"/uploads/kerala.jpg"``
        base_url: Public origin of the backend; a relative URL is returned when empty

    Returns:
        The URL, or an empty string when there is no filename
    """
    if not filename:
        return ""

    uploads_segment = settings.uploads_path.strip("/")
    clean_filename = filename.lstrip("/")
    if clean_filename.startswith(uploads_segment + "/"):
        clean_filename = clean_filename[len(uploads_segment) + 1:]

    if base_url:
        return f"{base_url.rstrip('/')}/{uploads_segment}/{clean_filename}"

    return f"/{uploads_segment}/{clean_filename}"


def process_single_image(image: Any, base_url: Optional[str] = None) -> str:
    """Normalize one stored image value into a URL."""
    if not image or not isinstance(image, str):
        return ""

    if image.startswith(("http://", "https://")):
        # Repair values that were absolutized twice
        if "/uploads/http://" in image or "/uploads/https://" in image:
            match = _DOUBLE_PREFIXED.search(image)
            if match:
                return match.group(1)
        return image

    return get_image_url(image, base_url)


def process_image_urls(images: Any, base_url: Optional[str] = None) -> list[str]:
    """Normalize a list of stored image values; anything that isn't a list yields []."""
    if not isinstance(images, list):
        return []
    return [process_single_image(image, base_url) for image in images]


def first_image(images: Any, base_url: Optional[str] = None) -> Optional[str]:
    """Return the first image as a URL, or None when there is none."""
    urls = [url for url in process_image_urls(images, base_url) if url]
    return urls[0] if urls else None


def resolve_base_url(request_base_url: Optional[str] = None) -> str:
    """Prefer the configured backend URL over the URL the request came in on."""
    return settings.backend_url or (request_base_url or "")

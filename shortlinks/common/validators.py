"""Validation utilities for short links."""

from urllib.parse import urlparse
from typing import Tuple

from ..shortcode import CODE_PATTERN, MIN_CODE_LENGTH, MAX_CODE_LENGTH


MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "Target URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if url != url.strip() or any(c.isspace() for c in url):
        return False, "Invalid URL format"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.hostname:
            return False, "URL must have a valid domain"

        # Accessing .port raises ValueError on an out-of-range or non-numeric port
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Custom code must be a string"

    if not CODE_PATTERN.fullmatch(short_code):
        return False, (
            f"Custom code must be {MIN_CODE_LENGTH}-{MAX_CODE_LENGTH} alphanumeric characters"
        )

    return True, ""

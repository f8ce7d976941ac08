#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/utils/security.py
"""Link target safety checks.

Functions
---------
- sanitize_null_bytes: Remove null and zero-width characters from a string
- is_relative_url: Check whether a URL is fragment, path or query relative
- is_safe_url: Allowlist check applied to link marks before publishing
"""

import logging

from md2adf.constants import (
    DANGEROUS_NULL_LIKE_CHARS,
    RELATIVE_URL_PREFIXES,
    SAFE_URL_SCHEMES,
    URL_SCHEME_PATTERN,
)

logger = logging.getLogger(__name__)


def sanitize_null_bytes(content: str) -> str:
    r"""Remove null bytes and zero-width characters that can hide a URL scheme.

    Parameters
    ----------
    content : str
        Content to sanitize

    Returns
    -------
    str
        Content with the characters removed

    Examples
    --------
    >>> sanitize_null_bytes("java\\u200bscript:alert(1)")
    'javascript:alert(1)'

    """
    if not content:
        return content

    for char in DANGEROUS_NULL_LIKE_CHARS:
        if char in content:
            content = content.replace(char, "")

    return content


def is_relative_url(url: str) -> bool:
    """Check if a URL is relative (starts with #, /, ./, ../ or ?).

    Examples
    --------
    >>> is_relative_url("#section")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    return url.strip().startswith(RELATIVE_URL_PREFIXES)


def is_safe_url(url: str) -> bool:
    """Check a link target against the scheme allowlist.

    Relative and path-only targets, and targets whose scheme is in the
    allowlist, are safe. Empty targets and unknown schemes (``javascript:``,
    ``data:``, ...) are not.

    Parameters
    ----------
    url : str
        Link target to check

    Returns
    -------
    bool
        True if the target may be published as-is

    Examples
    --------
    >>> is_safe_url("https://example.com/page")
    True
    >>> is_safe_url("mailto:someone@example.com")
    True
    >>> is_safe_url("javascript:alert(1)")
    False
    >>> is_safe_url("")
    False

    """
    if not url or not url.strip():
        return False

    cleaned = sanitize_null_bytes(url).strip()
    if is_relative_url(cleaned):
        return True

    match = URL_SCHEME_PATTERN.match(cleaned)
    if match is None:
        return True

    scheme = match.group(1).lower()
    if scheme not in SAFE_URL_SCHEMES:
        logger.debug(f"Rejected link target with scheme '{scheme}'")
        return False
    return True


__all__ = ["sanitize_null_bytes", "is_relative_url", "is_safe_url"]

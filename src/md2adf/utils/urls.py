#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/utils/urls.py
"""Confluence URL helpers."""

from __future__ import annotations

from md2adf.constants import CONFLUENCE_PAGE_URL_PATTERN


def clean_up_url_if_confluence(url: str, confluence_base_url: str | None) -> str:
    """Strip the title slug from a Confluence page URL.

    Confluence page links look like
    ``{base}/wiki/spaces/<KEY>/pages/<ID>/<Title+Slug>``. The slug changes
    whenever the page is renamed, so smart-link cards point at the stable
    ``.../pages/<ID>`` form instead. Query strings and fragments are kept.
    URLs outside the configured site are returned unchanged.

    Parameters
    ----------
    url : str
        Link target
    confluence_base_url : str or None
        Site root, e.g. ``https://example.atlassian.net``

    Returns
    -------
    str
        Cleaned URL

    Examples
    --------
    >>> clean_up_url_if_confluence(
    ...     "https://example.atlassian.net/wiki/spaces/DOC/pages/123/My+Page",
    ...     "https://example.atlassian.net",
    ... )
    'https://example.atlassian.net/wiki/spaces/DOC/pages/123'

    """
    if not confluence_base_url:
        return url

    base = confluence_base_url.rstrip("/")
    if not url.lower().startswith(base.lower()):
        return url

    match = CONFLUENCE_PAGE_URL_PATTERN.match(url[len(base) :])
    if match is None:
        return url

    return f"{url[: len(base)]}{match.group('page')}{match.group('rest') or ''}"


__all__ = ["clean_up_url_if_confluence"]

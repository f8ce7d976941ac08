#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/plugins/image_uploader.py
"""Upload local images and point media nodes at the stored attachments."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import unquote

from md2adf.adf.nodes import Node
from md2adf.constants import URL_SCHEME_PATTERN
from md2adf.plugins.base import AdfProcessingPlugin, PublisherFunctions, UploadedImageData, gather_items

logger = logging.getLogger(__name__)

UploadResults = dict[str, Optional[UploadedImageData]]


def is_local_image(url: str) -> bool:
    """Check whether an image location refers to a local file.

    Absolute URLs (``https:``, ``data:``, ...) and protocol-relative URLs are
    remote. A single-letter "scheme" is a Windows drive letter and counts as
    local.

    """
    if not url or url.startswith("//"):
        return False
    match = URL_SCHEME_PATTERN.match(url)
    return match is None or len(match.group(1)) == 1


def _is_external_media(node: Node) -> bool:
    attrs = node.attrs or {}
    return node.type == "media" and attrs.get("type") == "external" and isinstance(attrs.get("url"), str)


class ImageUploaderPlugin(AdfProcessingPlugin[list[str], UploadResults]):
    """Replace local ``external`` media references with uploaded file media.

    ``extract`` collects each distinct local image location once,
    ``transform`` uploads them concurrently through
    ``support_functions.upload_file`` and ``load`` rewrites the media nodes to
    ``{"type": "file", "id", "collection", "width", "height"}``. Images the
    publisher could not store (upload returned None) are left unchanged.

    """

    def extract(self, adf: Node) -> list[str]:
        locations: list[str] = []
        for node in adf.walk():
            if not _is_external_media(node):
                continue
            url = node.attrs["url"]  # type: ignore[index]
            if is_local_image(url) and url not in locations:
                locations.append(url)
        logger.debug(f"Found {len(locations)} local image(s) to upload")
        return locations

    async def transform(self, items: list[str], support_functions: PublisherFunctions) -> UploadResults:
        results = await gather_items(items, lambda url: support_functions.upload_file(unquote(url)))
        uploaded: UploadResults = dict(zip(items, results))
        for url, result in uploaded.items():
            if result is None:
                logger.warning(f"Image {url} was not uploaded; keeping the original reference")
        return uploaded

    def load(self, adf: Node, transformed: UploadResults) -> Node:
        for node in adf.walk():
            if not _is_external_media(node):
                continue
            uploaded = transformed.get(node.attrs["url"])  # type: ignore[index]
            if uploaded is None:
                continue
            node.attrs = {
                "type": "file",
                "id": uploaded.id,
                "collection": uploaded.collection,
                "width": uploaded.width,
                "height": uploaded.height,
            }
        return adf


__all__ = ["ImageUploaderPlugin", "is_local_image"]

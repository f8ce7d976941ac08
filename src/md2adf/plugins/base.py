#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/plugins/base.py
"""Base classes for ADF processing plugins.

A processing plugin rewrites a finished ADF document in three phases:

- ``extract(adf)``: synchronous and read-only; collects work items
- ``transform(items, support_functions)``: asynchronous; performs external
  effects such as uploads through the publisher-supplied capabilities
- ``load(adf, transformed)``: synchronous; rewrites the tree from the
  transformed results and returns it

Plugins are run one at a time by
:func:`~md2adf.plugins.pipeline.execute_adf_processing_pipeline`.

"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, Optional, Protocol, TypeVar

from md2adf.adf.nodes import Node

logger = logging.getLogger(__name__)

E = TypeVar("E")
T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class UploadedImageData:
    """Result of uploading an image attachment.

    Parameters
    ----------
    filename : str
        Attachment file name on the page
    id : str
        Media file id
    collection : str
        Media collection holding the file
    width : int
        Image width in pixels
    height : int
        Image height in pixels

    """

    filename: str
    id: str
    collection: str
    width: int
    height: int


class PublisherFunctions(Protocol):
    """Side-effecting capabilities supplied by the publishing layer."""

    async def upload_file(self, file_name: str) -> Optional[UploadedImageData]:
        """Upload a local file and describe the stored attachment."""
        ...

    async def upload_buffer(self, upload_filename: str, data: bytes) -> Optional[UploadedImageData]:
        """Upload in-memory bytes under ``upload_filename``."""
        ...


class AdfProcessingPlugin(ABC, Generic[E, T]):
    """Abstract base class for extract/transform/load document plugins.

    Subclasses implement the three phases. ``name`` identifies the plugin
    in logs and errors and defaults to the class name.

    Examples
    --------
    >>> class CountText(AdfProcessingPlugin[int, int]):
    ...     def extract(self, adf):
    ...         return sum(1 for n in adf.walk() if n.type == "text")
    ...     async def transform(self, items, support_functions):
    ...         return items
    ...     def load(self, adf, transformed):
    ...         return adf

    """

    @property
    def name(self) -> str:
        """Plugin name used in logs and errors."""
        return type(self).__name__

    @abstractmethod
    def extract(self, adf: Node) -> E:
        """Collect work items from ``adf`` without modifying it."""

    @abstractmethod
    async def transform(self, items: E, support_functions: PublisherFunctions) -> T:
        """Resolve the extracted items, performing any external effects."""

    @abstractmethod
    def load(self, adf: Node, transformed: T) -> Node:
        """Apply the transformed results to ``adf`` and return the document."""


async def gather_items(items: Iterable[K], worker: Callable[[K], Awaitable[V]]) -> list[V]:
    """Run ``worker`` concurrently over ``items`` and collect results in order.

    The first failure cancels every task still running and is re-raised, so
    callers never see a partial result set.

    Parameters
    ----------
    items : Iterable
        Work items
    worker : Callable
        Coroutine function applied to each item

    Returns
    -------
    list
        Results, aligned with ``items``

    """
    tasks: list[asyncio.Future[V]] = []
    try:
        for item in items:
            tasks.append(asyncio.ensure_future(worker(item)))
        if not tasks:
            return []
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug(f"Cancelled {len(pending)} outstanding task(s) after a failure")
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = [
    "UploadedImageData",
    "PublisherFunctions",
    "AdfProcessingPlugin",
    "gather_items",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/plugins/pipeline.py
"""Sequential coordinator for ADF processing plugins.

Each plugin runs its full extract, transform and load cycle before the next
plugin's ``extract`` sees the tree, so later plugins observe every rewrite
made by earlier ones. A failure in any phase aborts the run with
:class:`~md2adf.exceptions.PluginError`; no later phase or plugin runs.

Examples
--------
    >>> pipeline = PluginPipeline([JiraLinkPlugin("https://jira.example.com")])
    >>> adf = await pipeline.run(adf, support_functions)

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from md2adf.adf.nodes import Node
from md2adf.exceptions import PluginError
from md2adf.plugins.base import AdfProcessingPlugin, PublisherFunctions
from md2adf.plugins.image_uploader import ImageUploaderPlugin

logger = logging.getLogger(__name__)

# Plugin classes instantiated ahead of the configured plugins on every run
ALWAYS_ADF_PROCESSING_PLUGINS: tuple[type[AdfProcessingPlugin[Any, Any]], ...] = (ImageUploaderPlugin,)


async def _run_plugin(plugin: AdfProcessingPlugin[Any, Any], adf: Node, support_functions: PublisherFunctions) -> Node:
    name = plugin.name

    try:
        items = plugin.extract(adf)
    except Exception as e:
        logger.error(f"Plugin {name} failed during extract: {e}", exc_info=True)
        raise PluginError(name, "extract", original_error=e) from e

    try:
        transformed = await plugin.transform(items, support_functions)
    except Exception as e:
        logger.error(f"Plugin {name} failed during transform: {e}", exc_info=True)
        raise PluginError(name, "transform", original_error=e) from e

    try:
        result = plugin.load(adf, transformed)
    except Exception as e:
        logger.error(f"Plugin {name} failed during load: {e}", exc_info=True)
        raise PluginError(name, "load", original_error=e) from e

    if not isinstance(result, Node):
        raise PluginError(name, "load", message=f"Plugin '{name}' load returned {type(result).__name__}, not a Node")
    return result


async def execute_adf_processing_pipeline(
    plugins: Sequence[AdfProcessingPlugin[Any, Any]],
    adf: Node,
    support_functions: PublisherFunctions,
) -> Node:
    """Run ``plugins`` over ``adf`` strictly one after another.

    Parameters
    ----------
    plugins : Sequence[AdfProcessingPlugin]
        Plugins in execution order
    adf : Node
        Processed document
    support_functions : PublisherFunctions
        Capabilities handed to each plugin's ``transform``

    Returns
    -------
    Node
        The document returned by the last plugin's ``load``

    Raises
    ------
    PluginError
        If any phase of any plugin fails

    """
    for plugin in plugins:
        logger.debug(f"Running ADF processing plugin: {plugin.name}")
        adf = await _run_plugin(plugin, adf, support_functions)
    return adf


class PluginPipeline:
    """Always-on plugins followed by caller-configured plugins.

    Parameters
    ----------
    plugins : sequence of AdfProcessingPlugin or None, default = None
        Configured plugins, run after the always-on set
    include_default_plugins : bool, default = True
        Prepend instances of :data:`ALWAYS_ADF_PROCESSING_PLUGINS`

    """

    def __init__(
        self,
        plugins: Optional[Sequence[AdfProcessingPlugin[Any, Any]]] = None,
        include_default_plugins: bool = True,
    ):
        """Initialize the pipeline with its plugin list."""
        fixed = [plugin_class() for plugin_class in ALWAYS_ADF_PROCESSING_PLUGINS] if include_default_plugins else []
        self.plugins: list[AdfProcessingPlugin[Any, Any]] = [*fixed, *(plugins or [])]

    async def run(self, adf: Node, support_functions: PublisherFunctions) -> Node:
        """Run every plugin over ``adf``; see :func:`execute_adf_processing_pipeline`."""
        return await execute_adf_processing_pipeline(self.plugins, adf, support_functions)


__all__ = ["ALWAYS_ADF_PROCESSING_PLUGINS", "execute_adf_processing_pipeline", "PluginPipeline"]

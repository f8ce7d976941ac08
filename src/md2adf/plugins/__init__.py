#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/plugins/__init__.py
"""Extract/transform/load plugins applied to processed ADF documents.

The image uploader is always active; other plugins, such as the Jira link
plugin, are enabled by configuration.

"""

from md2adf.plugins.base import AdfProcessingPlugin, PublisherFunctions, UploadedImageData, gather_items
from md2adf.plugins.image_uploader import ImageUploaderPlugin
from md2adf.plugins.jira_link import JiraLinkPlugin
from md2adf.plugins.pipeline import ALWAYS_ADF_PROCESSING_PLUGINS, PluginPipeline, execute_adf_processing_pipeline

__all__ = [
    "AdfProcessingPlugin",
    "PublisherFunctions",
    "UploadedImageData",
    "gather_items",
    "ImageUploaderPlugin",
    "JiraLinkPlugin",
    "ALWAYS_ADF_PROCESSING_PLUGINS",
    "PluginPipeline",
    "execute_adf_processing_pipeline",
]

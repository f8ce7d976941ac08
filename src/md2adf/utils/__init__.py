#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/utils/__init__.py
"""Utility helpers for md2adf."""

from md2adf.utils.security import is_relative_url, is_safe_url, sanitize_null_bytes
from md2adf.utils.urls import clean_up_url_if_confluence

__all__ = ["clean_up_url_if_confluence", "is_relative_url", "is_safe_url", "sanitize_null_bytes"]

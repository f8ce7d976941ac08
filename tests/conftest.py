"""Pytest configuration and shared fixtures for md2adf test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from typing import Generator

import pytest
from utils import FakePublisher, render_plain

from md2adf.converter import MarkdownToAdfConverter
from md2adf.options import ConfluenceOptions
from md2adf.transforms.frontmatter_table import RenderMarkdown


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def render() -> RenderMarkdown:
    """Provide a renderer that wraps cell source in a plain paragraph."""
    return render_plain


@pytest.fixture
def options() -> ConfluenceOptions:
    """Provide options pointing at an example Confluence and Jira site."""
    return ConfluenceOptions(
        confluence_base_url="https://example.atlassian.net",
        jira_url="https://jira.example.com",
        content_root="/content",
    )


@pytest.fixture
def converter(options: ConfluenceOptions) -> MarkdownToAdfConverter:
    """Provide a converter configured with the example options."""
    return MarkdownToAdfConverter(options)


@pytest.fixture
def publisher() -> FakePublisher:
    """Provide a fake publisher recording uploads."""
    return FakePublisher()


@pytest.fixture
def restore_package_logger() -> Generator[logging.Logger, None, None]:
    """Restore the md2adf logger's handlers and level after a test."""
    logger = logging.getLogger("md2adf")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    try:
        yield logger
    finally:
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

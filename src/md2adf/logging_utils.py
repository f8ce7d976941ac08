#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2adf/logging_utils.py
"""Centralized logging utilities for applications embedding md2adf."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "md2adf"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    logger_name: Optional[str] = PACKAGE_LOGGER_NAME,
) -> logging.Logger:
    """Attach console (and optional file) handlers for conversion diagnostics.

    By default only the ``md2adf`` package logger is configured so that a host
    application embedding the converter keeps control of its own handlers.
    Pass ``logger_name=None`` to configure the root logger instead.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    logger_name : str or None, default "md2adf"
        Logger to configure; ``None`` selects the root logger.

    Returns
    -------
    logging.Logger
        The configured logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    target = logging.getLogger(logger_name)
    target.setLevel(resolved_level)
    target.handlers.clear()
    if logger_name:
        # Handlers live here now; avoid duplicate lines through the root logger
        target.propagate = False

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    target.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            target.addHandler(file_handler)
            target.info("Logging to file: %s", log_file)
        except OSError as exc:  # pragma: no cover - handled at runtime
            target.warning("Could not create log file %s: %s", log_file, exc)

    return target

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2adf library.

This module defines specialized exception classes for the error conditions
that can occur while converting markdown into Atlassian Document Format.

Exception Hierarchy
-------------------
- Md2AdfError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (options file loading)

  - MalformedAdfError (invalid ADF JSON structure)

  - TraversalError (tree cannot be traversed; fatal)

  - EmbeddedContentError (invalid payload inside a code block; recoverable)

  - PluginError (extract/transform/load failure in a processing plugin)

"""

from typing import Any


class Md2AdfError(Exception):
    """Base exception class for all md2adf-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Md2AdfError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when an options file cannot be read or parsed.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(
            message, parameter_name="config_path", parameter_value=config_path, original_error=original_error
        )
        self.config_path = config_path


class MalformedAdfError(Md2AdfError):
    """Exception raised when ADF JSON does not describe a valid node tree.

    Parameters
    ----------
    message : str
        Description of the structural problem
    path : str, optional
        Location of the offending value, e.g. ``content[2].marks``
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, path: str | None = None, original_error: Exception | None = None):
        """Initialize the malformed ADF error."""
        if path:
            message = f"{message} (at {path})"
        super().__init__(message, original_error=original_error)
        self.path = path


class TraversalError(Md2AdfError):
    """Exception raised when a document tree cannot be traversed.

    This is a fatal error: the conversion is aborted because no partial
    document is a safe output.

    """


class EmbeddedContentError(Md2AdfError):
    """Exception raised when a code block carries an invalid embedded payload.

    Raised for malformed ADF JSON or YAML table data inside a code block. The
    node handlers catch this error, log it, and keep the original code block.

    Parameters
    ----------
    message : str
        Description of the decoding failure
    language : str
        Code block language token that selected the decoder
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, language: str, original_error: Exception | None = None):
        """Initialize the embedded content error."""
        super().__init__(message, original_error=original_error)
        self.language = language


class PluginError(Md2AdfError):
    """Exception raised when an ADF processing plugin fails.

    A plugin failure aborts the whole pipeline run; no partially resolved
    rewrite is applied.

    Parameters
    ----------
    plugin_name : str
        Name of the failing plugin
    phase : str
        Phase that failed: ``"extract"``, ``"transform"`` or ``"load"``
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        plugin_name: str,
        phase: str,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the plugin error."""
        if message is None:
            message = f"Plugin '{plugin_name}' failed during {phase}"
            if original_error is not None:
                message = f"{message}: {original_error}"
        super().__init__(message, original_error=original_error)
        self.plugin_name = plugin_name
        self.phase = phase


__all__ = [
    "Md2AdfError",
    "ValidationError",
    "ConfigurationError",
    "MalformedAdfError",
    "TraversalError",
    "EmbeddedContentError",
    "PluginError",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the chat2md library.

The tree and table serializers never raise: every well-formed node maps to
some Markdown string. The exceptions below belong to the collaborators around
them, which read saved chat pages, locate conversation turns and write the
exported transcript.

Exception Hierarchy
-------------------
- Chat2MdError (base exception)

  - ValidationError (parameter/option validation)

  - FileError (file access and I/O)
    - InputFileNotFoundError (input file doesn't exist)
    - FileAccessError (permissions, unreadable files)

  - ParsingError (input page parsing failures)
    - NoTurnsFoundError (page holds no conversation turns)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

"""

from typing import Any


class Chat2MdError(Exception):
    """Base exception class for all chat2md-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(Chat2MdError):
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


class FileError(Chat2MdError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class InputFileNotFoundError(FileError):
    """Exception raised when an input page cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file exists but cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Chat2MdError):
    """Exception raised when a saved chat page cannot be interpreted.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class NoTurnsFoundError(ParsingError):
    """Exception raised when a page contains no conversation turns.

    Parameters
    ----------
    message : str, optional
        Custom error message. If not provided, uses default message
    source : str, optional
        Name of the page that was searched

    """

    def __init__(self, message: str | None = None, source: str | None = None):
        """Initialize the no-turns error."""
        if message is None:
            message = "No conversation turns found"
            if source:
                message += f" in '{source}'"
            message += ". Make sure the page is a saved chat conversation."
        super().__init__(message, parsing_stage="turn_discovery")
        self.source = source


class RenderingError(Chat2MdError):
    """Exception raised when producing the exported transcript fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing the output file fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


__all__ = [
    "Chat2MdError",
    "ValidationError",
    "FileError",
    "InputFileNotFoundError",
    "FileAccessError",
    "ParsingError",
    "NoTurnsFoundError",
    "RenderingError",
    "OutputWriteError",
]

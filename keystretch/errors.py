# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Exceptions raised by keystretch.

Assumptions:
- Every library error derives from KeystretchError
- Each subclass also derives from the closest builtin so callers may catch either
- Errors carry a machine-readable error_code for the CLI and logs
"""
from typing import Any, Optional


class KeystretchError(Exception):
    """Base exception for keystretch.

    Args:
        message: Human-readable error message
        error_code: Machine-readable error code
    """

    def __init__(self, message: str, error_code: str = "KEYSTRETCH_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidArgumentError(KeystretchError, ValueError):
    """Raised when a required argument is missing or forbidden."""

    def __init__(self, param_name: str, message: Optional[str] = None):
        self.param_name = param_name
        super().__init__(
            message or f"{param_name} cannot be None.",
            error_code="INVALID_ARGUMENT",
        )


class OutOfRangeError(KeystretchError, ValueError):
    """Raised when a numeric parameter falls outside its allowed range."""

    def __init__(self, param_name: str, actual_value: Any, message: str):
        self.param_name = param_name
        self.actual_value = actual_value
        super().__init__(
            f"{message} (parameter: {param_name}, actual value: {actual_value!r})",
            error_code="OUT_OF_RANGE",
        )


class FormatError(KeystretchError, ValueError):
    """Raised when an encoded result cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message, error_code="FORMAT_ERROR")


class NotSupportedError(KeystretchError, NotImplementedError):
    """Raised for operations or values that are deliberately unsupported."""

    def __init__(self, message: str):
        super().__init__(message, error_code="NOT_SUPPORTED")

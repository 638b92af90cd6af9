"""Custom exceptions for corruption operations.

This module defines the exception hierarchy for Korrupt, providing
detailed error information and categorization.
"""

from typing import Any


class KorruptError(Exception):
    """Base exception for corruption operations.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for categorization
        context: Additional context information

    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class ConfigError(KorruptError):
    """Raised when a method, range, length or seed configuration is invalid."""

    pass


class LengthError(KorruptError):
    """Raised when a bit buffer cannot be packed back into whole bytes.

    Signals a broken invariant inside a corruption method rather than
    bad user input.
    """

    pass

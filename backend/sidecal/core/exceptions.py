"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class SidecalError(Exception):
    """Base exception for sidecal."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(SidecalError):
    """Resource not found."""

    pass


class ValidationError(SidecalError):
    """Validation error."""

    pass


class InfrastructureError(SidecalError):
    """Infrastructure-related error (storage I/O, database, etc.)."""

    pass

# exceptions.py
"""
Custom exceptions for the Padel Duplas app.

This module defines domain-specific exceptions for better error handling
and debugging throughout the application.
"""


class PadelAppError(Exception):
    """Base exception for all application errors."""

    pass


class ValidationError(PadelAppError):
    """Raised when input validation fails.

    Attributes:
        field: Name of the offending form field, if known
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DuplicateCredentialError(ValidationError):
    """Raised when a RUT is already registered in the same category."""

    pass


class DuplicateCategoryError(ValidationError):
    """Raised when a (type, level) category already exists."""

    pass


class StorageError(PadelAppError):
    """Raised when a tournament store operation fails."""

    pass


class TournamentError(PadelAppError):
    """Raised when an operation on an active tournament is invalid."""

    pass

"""Custom exceptions for ecc2cursor."""

from typing import Any


class Ecc2CursorError(Exception):
    """Base exception for all ecc2cursor errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class CatalogError(Ecc2CursorError):
    """Raised when the curated data catalog cannot be loaded or is invalid."""


class NamingError(Ecc2CursorError):
    """Raised when an install prefix cannot be used as a naming key."""


class TranslationError(Ecc2CursorError):
    """Raised when a category translator fails to read or write documents."""

    def __init__(
        self,
        message: str,
        category: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.category = category
        self.path = path


class RegistryError(Ecc2CursorError):
    """Raised when the service registry cannot be written."""


class SourceError(Ecc2CursorError):
    """Raised when the source tree cannot be acquired."""

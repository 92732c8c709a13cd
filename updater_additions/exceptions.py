"""Custom exceptions for updater-additions."""

from typing import Optional


class AdditionsError(Exception):
    """Base exception for all updater-additions operations."""


class ConfigurationError(AdditionsError):
    """Raised when configuration validation fails."""


class SettingsStorageError(AdditionsError):
    """Raised when persisted settings cannot be read or written."""


class AdditionValidationError(AdditionsError):
    """Raised when a submitted addition is rejected."""


class InvalidTypeError(AdditionValidationError):
    """Raised when the addition type is not one of the supported types."""


class InvalidSlugError(AdditionValidationError):
    """Raised when the addition slug is empty after sanitization."""


class InvalidURIError(AdditionValidationError):
    """Raised when the repository URI is not a well-formed http(s) URL."""


class DuplicateAdditionError(AdditionValidationError):
    """Raised when an addition with the same slug-derived ID already exists."""

    def __init__(self, addition_id: str, slug: Optional[str] = None) -> None:
        self.addition_id = addition_id
        self.slug = slug
        super().__init__(f"Addition for slug '{slug}' already exists (ID {addition_id})")

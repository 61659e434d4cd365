"""
Storefront error taxonomy.

Every business rule violation raised by the services is a subclass of
StorefrontError. The API layer renders them uniformly as
``{"success": false, "message": ..., "error": ...}`` using ``status_code``.
"""
from typing import Optional


class StorefrontError(Exception):
    """Base class for all storefront errors."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StorefrontError):
    """Malformed or missing input."""

    status_code = 400


class InvalidVariant(ValidationError):
    """A size variant list failed validation."""


class NotFound(StorefrontError):
    """A product, order, variant, image or item id has no match."""

    status_code = 404


class DuplicateSize(StorefrontError):
    """A product already carries a variant of the requested size."""

    status_code = 409


class CapacityExceeded(StorefrontError):
    """A product would hold more images than allowed."""

    status_code = 400


class EmptyOrder(StorefrontError):
    """An order would be left without items."""

    status_code = 400


class EmptyVariantList(StorefrontError):
    """A product would be left without size variants."""

    status_code = 400


class StorageError(StorefrontError):
    """The document store or the blob store failed."""

    status_code = 500


class AuthenticationError(StorefrontError):
    """Submitted credentials do not match."""

    status_code = 401


class ConfigurationError(StorefrontError):
    """A required setting is missing."""

    status_code = 500

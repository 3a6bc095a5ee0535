"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required input field is missing or invalid."""


class NotFound(DomainException):
    """A requested record does not exist."""


class ProductNotFound(NotFound):
    """No stock product with the given id."""


class ItemNotFound(NotFound):
    """No basket entry with the given id."""


class InvalidQuantity(DomainException):
    """A non-positive quantity was found where a positive one was expected."""


class InsufficientStock(DomainException):
    """Stock quantity was zero or below at allocation time."""


class StorageError(DomainException):
    """The underlying document store failed to read or write."""


class AuthFailed(DomainException):
    """Unknown username or wrong password."""

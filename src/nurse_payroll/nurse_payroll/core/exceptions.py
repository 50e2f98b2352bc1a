class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidValueError(ValidationError):
    """Raised when a numeric value is negative, non-finite or not a number."""


class NotFoundError(DomainError):
    """Raised when a rate key, nurse or salary record does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with a unique key the storage layer enforces."""

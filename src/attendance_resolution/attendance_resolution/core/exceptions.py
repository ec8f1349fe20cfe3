class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ProcessingError(DomainError):
    """Raised when an attendance processing run cannot be completed."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

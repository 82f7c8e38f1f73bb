# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class AuthError(DomainError):
    """Raised when an operation needs an authenticated actor and none is present."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., deleting an approved budget)."""


class ConflictError(DomainError):
    """Raised when a workflow transition is attempted from the wrong state."""


class ConcurrencyError(ConflictError):
    """Raised when optimistic locking detects a stale update."""

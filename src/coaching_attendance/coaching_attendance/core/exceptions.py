class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student or record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials or a session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a destructive action is not confirmed correctly."""

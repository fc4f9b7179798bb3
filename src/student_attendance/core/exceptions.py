class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AuthenticationRequired(AuthorizationError):
    """Raised when a write is attempted without a resolvable actor."""


class ConflictError(DomainError):
    """Raised when the database rejects a write as a duplicate."""


class TransientIOError(DomainError):
    """Raised when a query or write could not reach the database."""

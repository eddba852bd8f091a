class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when no authenticated principal could be resolved."""


class NotFoundError(DomainError):
    """Raised when a referenced tenant, department, employee or task is absent."""


class ConflictError(DomainError):
    """Raised when a create would duplicate a unique key."""


class DeliveryError(DomainError):
    """Raised when the mail collaborator fails to send a message."""

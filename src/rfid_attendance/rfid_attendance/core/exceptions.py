class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input or reference data is invalid."""


class ConfigurationError(DomainError):
    """Raised when loaded reference data or settings break an invariant.

    Example: two directory records whose card identifiers collide after
    normalization.
    """


class StorageError(DomainError):
    """Raised when the durable store is unreachable, times out or fails a write."""

"""Domain-specific exceptions for stores services."""


class StoresServiceError(Exception):
    """Base exception for stores services."""
    pass


class StoreNotFoundError(StoresServiceError):
    """Raised when store does not exist."""
    pass

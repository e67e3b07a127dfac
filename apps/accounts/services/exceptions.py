"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class StoreUnavailableError(AccountsServiceError):
    """Raised when a store-scoped user has no active home store."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class DuplicateUserError(AccountsServiceError):
    """Raised when a user with the same email is already registered."""
    pass


class InvalidStoreError(AccountsServiceError):
    """Raised when a user is assigned to a store that does not exist."""
    pass

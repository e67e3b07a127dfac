"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    StoreUnavailableError,
    UserNotFoundError,
    DuplicateUserError,
    InvalidStoreError,
)
from .sign_in import sign_in
from .user_management import list_users, get_user, create_user, update_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'StoreUnavailableError',
    'UserNotFoundError',
    'DuplicateUserError',
    'InvalidStoreError',
    # Services
    'sign_in',
    'list_users',
    'get_user',
    'create_user',
    'update_user',
]

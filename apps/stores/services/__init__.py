"""
Stores app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    StoresServiceError,
    StoreNotFoundError,
)
from .store_management import (
    list_stores,
    get_store,
    create_store,
    update_store,
)

__all__ = [
    # Exceptions
    'StoresServiceError',
    'StoreNotFoundError',

    # Store Management
    'list_stores',
    'get_store',
    'create_store',
    'update_store',
]

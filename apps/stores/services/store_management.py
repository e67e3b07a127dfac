"""Store CRUD operations service."""

import logging
from typing import Optional

from django.db import transaction

from ..models import Store, StoreStatus
from .exceptions import StoreNotFoundError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'address', 'phone', 'email', 'status')


def list_stores(*, status: Optional[str] = StoreStatus.ACTIVE):
    """
    List stores ordered by name.

    Args:
        status: Only stores with this status; None returns every store

    Returns:
        QuerySet of Store
    """
    queryset = Store.objects.all()
    if status is not None:
        queryset = queryset.filter(status=status)
    return queryset.order_by('name')


def get_store(*, store_id: int) -> Store:
    """
    Get a store by ID.

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        return Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")


@transaction.atomic
def create_store(
    *,
    name: str,
    address: str = '',
    phone: str = '',
    email: str = ''
) -> Store:
    """Register a new store. New stores always start active."""
    store = Store.objects.create(
        name=name,
        address=address,
        phone=phone,
        email=email,
        status=StoreStatus.ACTIVE,
    )
    logger.info("Created store %s (%s)", store.id, store.name)
    return store


@transaction.atomic
def update_store(*, store_id: int, **fields) -> Store:
    """
    Update store details.

    Only the keyword arguments that are passed are written.

    Args:
        store_id: ID of the store
        **fields: Any of name, address, phone, email, status

    Returns:
        Updated Store instance

    Raises:
        StoreNotFoundError: If store doesn't exist
    """
    try:
        store = Store.objects.select_for_update().get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")

    update_fields = ['updated_at']
    for field in UPDATABLE_FIELDS:
        if field in fields:
            setattr(store, field, fields[field])
            update_fields.append(field)

    store.save(update_fields=update_fields)
    logger.info("Updated store %s fields=%s", store.id, update_fields[1:])
    return store

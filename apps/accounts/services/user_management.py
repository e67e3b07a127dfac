"""User administration service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.stores.models import Store

from .exceptions import DuplicateUserError, InvalidStoreError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def list_users():
    """All users, newest first, with their home store joined."""
    return User.objects.select_related('store').order_by('-created_at')


def get_user(*, user_id: UUID) -> User:
    """
    Get a user by ID.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        return User.objects.select_related('store').get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


def _resolve_store(store_id: Optional[int]) -> Optional[Store]:
    if store_id is None:
        return None
    try:
        return Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise InvalidStoreError(f"Store with ID {store_id} does not exist")


@transaction.atomic
def create_user(
    *,
    email: str,
    name: str = '',
    role: str = 'store_staff',
    store_id: Optional[int] = None,
    password: Optional[str] = None
) -> User:
    """
    Register a user profile.

    Accounts without a password can only sign in through an external
    identity provider.

    Raises:
        DuplicateUserError: If email is already registered
        InvalidStoreError: If store_id does not exist
    """
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateUserError(f"User with email {email} is already registered")

    store = _resolve_store(store_id)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                role=role,
                store=store,
            )
    except IntegrityError:
        raise DuplicateUserError(f"User with email {email} is already registered")

    logger.info("Created user %s with role %s", user.id, user.role)
    return user


@transaction.atomic
def update_user(
    *,
    user_id: UUID,
    **fields
) -> User:
    """
    Update a user's name, role, home store or active flag.

    Only the keyword arguments that are passed are written; pass
    ``store_id=None`` to detach the user from their store.

    Raises:
        UserNotFoundError: If user doesn't exist
        InvalidStoreError: If store_id does not exist
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    update_fields = ['updated_at']

    for field in ('name', 'role', 'is_active'):
        if field in fields:
            setattr(user, field, fields[field])
            update_fields.append(field)

    if 'store_id' in fields:
        user.store = _resolve_store(fields['store_id'])
        update_fields.append('store')

    user.save(update_fields=update_fields)
    logger.info("Updated user %s fields=%s", user.id, update_fields[1:])

    return get_user(user_id=user.id)

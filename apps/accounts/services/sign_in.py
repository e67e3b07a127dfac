"""
Dashboard sign-in.

Admins sign in from anywhere. Store managers and staff work inside their
home store, so they can only sign in while that store is active.
"""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.accounts.models import UserRole
from apps.stores.models import StoreStatus

from .exceptions import InvalidCredentialsError, InactiveAccountError, StoreUnavailableError

User = get_user_model()

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _check_home_store(user) -> None:
    if user.role == UserRole.ADMIN:
        return
    if user.store is None:
        logger.warning("Sign-in rejected for %s: no home store", user.email)
        raise StoreUnavailableError("No store is assigned to this account")
    if user.store.status != StoreStatus.ACTIVE:
        logger.warning(
            "Sign-in rejected for %s: store %s is %s",
            user.email, user.store_id, user.store.status,
        )
        raise StoreUnavailableError(f"Store {user.store.name} is {user.store.status}")


def sign_in(*, email: str, password: str) -> User:
    """
    Check dashboard credentials and record the sign-in.

    Args:
        email: Login email, matched case-insensitively
        password: Plain-text password

    Returns:
        The user with the home store joined

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Account is deactivated
        StoreUnavailableError: A store-scoped user has no active home store
    """
    user = User.objects.select_related('store').filter(email__iexact=email).first()

    if user is None:
        # Hash anyway so unknown emails take as long as wrong passwords
        User().set_password(password)
        logger.warning("Sign-in rejected for unknown email %s", email)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.check_password(password):
        logger.warning("Sign-in rejected for %s: bad password", email)
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    _check_home_store(user)

    user.last_login = timezone.now()
    User.objects.filter(id=user.id).update(last_login=user.last_login)

    logger.info("Signed in %s (%s)", user.email, user.role)
    return user

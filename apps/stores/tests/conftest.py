import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.stores.models import Store, StoreStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        name='Store Staff',
        role=UserRole.STORE_STAFF,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as test user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def store(db):
    """Create and return an active store."""
    return Store.objects.create(
        name='Shibuya',
        address='Tokyo, Shibuya 1-1',
        phone='03-0000-0000',
        email='shibuya@example.com',
    )


@pytest.fixture
def archived_store(db):
    """Create and return an archived store."""
    return Store.objects.create(name='Archived Shop', status=StoreStatus.ARCHIVED)

import pytest
from uuid import uuid4

from apps.accounts.models import UserRole
from apps.accounts.services import (
    sign_in,
    create_user,
    update_user,
    get_user,
    InvalidCredentialsError,
    InactiveAccountError,
    StoreUnavailableError,
    DuplicateUserError,
    InvalidStoreError,
    UserNotFoundError,
)
from apps.stores.models import StoreStatus


@pytest.mark.django_db
class TestSignIn:
    """Tests for sign_in.py service functions."""

    def test_sign_in(self, user):
        signed_in = sign_in(email=user.email, password='TestPass123!')

        assert signed_in == user
        assert signed_in.last_login is not None
        user.refresh_from_db()
        assert user.last_login == signed_in.last_login

    def test_sign_in_joins_home_store(self, user, django_assert_num_queries):
        signed_in = sign_in(email=user.email, password='TestPass123!')

        with django_assert_num_queries(0):
            assert signed_in.store.name == 'Shibuya'

    def test_sign_in_bad_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            sign_in(email=user.email, password='nope')

    def test_sign_in_unknown_email(self, db):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            sign_in(email='ghost@example.com', password='nope')

        assert str(exc_info.value) == 'Invalid email or password'

    def test_sign_in_inactive(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            sign_in(email=user_inactive.email, password='TestPass123!')

    @pytest.mark.parametrize('store_status', [StoreStatus.INACTIVE, StoreStatus.ARCHIVED])
    def test_sign_in_closed_home_store(self, user, store, store_status):
        """Store staff cannot sign in while their store is closed."""
        store.status = store_status
        store.save()

        with pytest.raises(StoreUnavailableError) as exc_info:
            sign_in(email=user.email, password='TestPass123!')

        assert store_status in str(exc_info.value)
        user.refresh_from_db()
        assert user.last_login is None

    def test_sign_in_without_home_store(self, db):
        staff = create_user(email='floating@example.com', password='TestPass123!')

        with pytest.raises(StoreUnavailableError):
            sign_in(email=staff.email, password='TestPass123!')

    def test_admin_signs_in_without_store(self, admin_user):
        """Admins are not bound to a store."""
        signed_in = sign_in(email=admin_user.email, password='TestPass123!')

        assert signed_in.store is None


@pytest.mark.django_db
class TestUserManagement:
    """Tests for user_management.py service functions."""

    def test_create_user_defaults(self, db):
        """New users default to store staff without a store."""
        user = create_user(email='new@example.com')

        assert user.role == UserRole.STORE_STAFF
        assert user.store is None

    def test_create_duplicate_email_ignores_case(self, user):
        with pytest.raises(DuplicateUserError):
            create_user(email=user.email.upper())

    def test_create_with_unknown_store(self, db):
        with pytest.raises(InvalidStoreError):
            create_user(email='new@example.com', store_id=999999)

    def test_update_user(self, user):
        updated = update_user(user_id=user.id, name='Renamed', is_active=False)

        assert updated.name == 'Renamed'
        assert not updated.is_active
        assert updated.store_id == user.store_id

    def test_update_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            update_user(user_id=uuid4(), name='Ghost')

    def test_get_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            get_user(user_id=uuid4())

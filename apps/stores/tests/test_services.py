import pytest

from apps.stores.models import Store, StoreStatus
from apps.stores.services import (
    list_stores,
    get_store,
    create_store,
    update_store,
    StoreNotFoundError,
)


@pytest.mark.django_db
class TestStoreManagement:
    """Tests for store_management.py service functions."""

    def test_create_store_is_active(self, db):
        """New stores start active."""
        store = create_store(name='Umeda', address='Osaka')

        assert store.status == StoreStatus.ACTIVE
        assert store.is_active

    def test_list_stores_active_only_by_default(self, store, archived_store):
        assert list(list_stores()) == [store]

    def test_list_all_stores(self, store, archived_store):
        """status=None returns every store ordered by name."""
        assert list(list_stores(status=None)) == [archived_store, store]

    def test_get_unknown_store(self, db):
        with pytest.raises(StoreNotFoundError):
            get_store(store_id=999999)

    def test_update_store(self, store):
        """Only passed fields change."""
        updated = update_store(store_id=store.id, phone='03-1111-1111')

        assert updated.phone == '03-1111-1111'
        assert updated.name == 'Shibuya'

    def test_update_unknown_store(self, store):
        with pytest.raises(StoreNotFoundError):
            update_store(store_id=store.id + 1000, name='Ghost')

        assert not Store.objects.filter(name='Ghost').exists()

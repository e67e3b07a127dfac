import pytest
from django.urls import reverse
from rest_framework import status
from apps.stores.models import Store, StoreStatus


@pytest.mark.django_db
class TestStoreList:
    """Tests for GET/POST /api/stores/"""

    def test_list_stores(self, authenticated_client, store, archived_store):
        """Archived stores are hidden by default."""
        url = reverse('stores:store-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [s['name'] for s in response.data] == ['Shibuya']

    def test_list_all_statuses(self, authenticated_client, store, archived_store):
        url = reverse('stores:store-list')
        response = authenticated_client.get(url, {'status': 'all'})

        assert len(response.data) == 2

    def test_list_invalid_status(self, authenticated_client, store):
        url = reverse('stores:store-list')
        response = authenticated_client.get(url, {'status': 'closed'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_store(self, authenticated_client):
        url = reverse('stores:store-list')
        data = {'name': 'Umeda', 'address': 'Osaka, Umeda 2-2'}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == StoreStatus.ACTIVE
        assert Store.objects.filter(name='Umeda').exists()

    def test_list_unauthenticated(self, api_client, store):
        url = reverse('stores:store-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data


@pytest.mark.django_db
class TestStoreDetail:
    """Tests for GET/PATCH /api/stores/{id}/"""

    def test_get_store(self, authenticated_client, store):
        url = reverse('stores:store-detail', args=[store.id])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'shibuya@example.com'

    def test_get_unknown_store(self, authenticated_client, db):
        url = reverse('stores:store-detail', args=[999999])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_archive_store(self, authenticated_client, store):
        url = reverse('stores:store-detail', args=[store.id])
        response = authenticated_client.patch(url, {'status': 'archived'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        store.refresh_from_db()
        assert store.status == StoreStatus.ARCHIVED

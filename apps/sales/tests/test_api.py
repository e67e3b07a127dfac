import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status
from apps.sales.models import Category, Product, ProductStatus, SalesRecord


@pytest.mark.django_db
class TestProductList:
    """Tests for GET /api/products/"""

    def test_list_products(self, authenticated_client, product, archived_product):
        url = reverse('sales:product-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['category'] == {
            'id': product.category_id,
            'code': '10',
            'name': 'ドリンク',
        }
        assert response.data[0]['store'] == {'name': 'Shibuya'}

    def test_list_products_by_store(self, authenticated_client, product, other_store):
        url = reverse('sales:product-list')
        response = authenticated_client.get(url, {'storeId': other_store.id})

        assert response.data == []

    def test_list_products_unauthenticated(self, api_client, product):
        url = reverse('sales:product-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestCategoryList:
    """Tests for GET/POST /api/categories/"""

    def test_list_categories_tree(self, authenticated_client, category):
        """Level 1 comes first; parent and children are nested."""
        hot = Category.objects.create(code='101', name='ホット', level=2, parent=category)
        Category.objects.create(code='102', name='Old', level=2, parent=category, status=ProductStatus.ARCHIVED)

        url = reverse('sales:category-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [c['code'] for c in response.data] == ['10', '101']
        assert response.data[0]['children'] == [{'id': hot.id, 'code': '101', 'name': 'ホット'}]
        assert response.data[1]['parent'] == {'id': category.id, 'code': '10', 'name': 'ドリンク'}

    def test_create_category(self, authenticated_client, category):
        url = reverse('sales:category-list')
        data = {'code': '101', 'name': 'ホット', 'level': 2, 'parent_id': category.id}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['parent_id'] == category.id
        assert response.data['status'] == 'active'
        assert response.data['children'] == []

    def test_create_defaults_to_level_one(self, authenticated_client, db):
        url = reverse('sales:category-list')
        response = authenticated_client.post(url, {'code': '30', 'name': 'グッズ'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['level'] == 1
        assert response.data['parent_id'] is None

    def test_create_duplicate_code(self, authenticated_client, category):
        url = reverse('sales:category-list')
        response = authenticated_client.post(url, {'code': '10', 'name': 'Other'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already used' in response.data['error']

    def test_create_invalid_level(self, authenticated_client, db):
        url = reverse('sales:category-list')
        response = authenticated_client.post(url, {'code': '30', 'name': 'x', 'level': 3}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'level' in response.data['details']

    def test_create_unknown_parent(self, authenticated_client, db):
        url = reverse('sales:category-list')
        data = {'code': '101', 'name': 'ホット', 'level': 2, 'parent_id': 999999}
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Category.objects.count() == 0

    def test_list_unauthenticated(self, api_client):
        response = api_client.get(reverse('sales:category-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestSalesRecordList:
    """Tests for GET /api/sales-records/"""

    def test_list_sales_records(self, authenticated_client, sales_records):
        url = reverse('sales:sales-record-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [r['date'] for r in response.data] == ['2025-06-18', '2025-06-17', '2025-06-16']
        assert response.data[0]['product'] == {'name': 'Latte'}
        assert response.data[0]['store'] == {'name': 'Umeda'}

    def test_filter_by_store_and_dates(self, authenticated_client, sales_records, store):
        url = reverse('sales:sales-record-list')
        response = authenticated_client.get(url, {
            'storeId': store.id,
            'startDate': '2025-06-17',
            'endDate': '2025-06-30',
        })

        assert [r['date'] for r in response.data] == ['2025-06-17']

    def test_inverted_date_range(self, authenticated_client, sales_records):
        url = reverse('sales:sales-record-list')
        response = authenticated_client.get(url, {
            'startDate': '2025-06-30',
            'endDate': '2025-06-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestSalesCsvUpload:
    """Tests for POST /api/sales-records/upload-csv/"""

    def test_upload_csv(self, authenticated_client, store, sales_csv):
        url = reverse('sales:sales-csv-upload')
        upload = SimpleUploadedFile('sales.csv', sales_csv.encode('utf-8'), content_type='text/csv')
        response = authenticated_client.post(
            url,
            {'file': upload, 'storeId': store.id},
            format='multipart',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['imported_count'] == 2
        assert response.data['errors'] == []
        assert SalesRecord.objects.filter(store=store).count() == 2

    def test_upload_reports_bad_rows(self, authenticated_client, store, sales_csv):
        """Partial success is still a 200 with the failed rows listed."""
        content = sales_csv + '2025/13/01(月),1001,ブレンドコーヒー,10,ドリンク,¥450,1,¥450\n'
        upload = SimpleUploadedFile('sales.csv', content.encode('utf-8'), content_type='text/csv')
        url = reverse('sales:sales-csv-upload')
        response = authenticated_client.post(
            url,
            {'file': upload, 'storeId': store.id},
            format='multipart',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['imported_count'] == 2
        assert response.data['error_count'] == 1
        assert response.data['errors'][0]['row'] == 4

    def test_upload_unknown_store(self, authenticated_client, db, sales_csv):
        upload = SimpleUploadedFile('sales.csv', sales_csv.encode('utf-8'), content_type='text/csv')
        url = reverse('sales:sales-csv-upload')
        response = authenticated_client.post(
            url,
            {'file': upload, 'storeId': 999999},
            format='multipart',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_upload_without_file(self, authenticated_client, store):
        url = reverse('sales:sales-csv-upload')
        response = authenticated_client.post(url, {'storeId': store.id}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'file' in response.data['details']


@pytest.mark.django_db
class TestProductCsvUpload:
    """Tests for POST /api/products/upload-csv/"""

    def test_upload_product_master(self, authenticated_client, store, product_csv):
        url = reverse('sales:product-csv-upload')
        upload = SimpleUploadedFile('products.csv', product_csv.encode('utf-8'), content_type='text/csv')
        response = authenticated_client.post(
            url,
            {'file': upload, 'storeId': store.id},
            format='multipart',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['imported_count'] == 2
        assert response.data['message'] == 'Imported 2 products successfully.'
        assert Product.objects.get(name='ブレンドコーヒー').category.code == '101'

    def test_upload_unknown_store(self, authenticated_client, db, product_csv):
        upload = SimpleUploadedFile('products.csv', product_csv.encode('utf-8'), content_type='text/csv')
        response = authenticated_client.post(
            reverse('sales:product-csv-upload'),
            {'file': upload, 'storeId': 999999},
            format='multipart',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Category.objects.count() == 0

    def test_upload_sales_file_as_master(self, authenticated_client, store):
        """A file without the category columns is rejected as a whole."""
        content = '商品コード,商品名,平均単価\n1001,ブレンドコーヒー,¥450\n'
        upload = SimpleUploadedFile('products.csv', content.encode('utf-8'), content_type='text/csv')
        response = authenticated_client.post(
            reverse('sales:product-csv-upload'),
            {'file': upload, 'storeId': store.id},
            format='multipart',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'カテゴリ1コード' in response.data['error']

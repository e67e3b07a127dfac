import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.sales.models import Category, Product, ProductStatus, SalesRecord
from apps.stores.models import Store

SALES_CSV_HEADER = '営業日,商品コード,商品名,カテゴリ1コード,カテゴリ1,平均単価,売上数量,売上金額\n'
PRODUCT_CSV_HEADER = '商品コード,商品名,カテゴリ1コード,カテゴリ1,カテゴリ2コード,カテゴリ2,平均単価\n'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def store(db):
    return Store.objects.create(name='Shibuya')


@pytest.fixture
def other_store(db):
    return Store.objects.create(name='Umeda')


@pytest.fixture
def user(db, store):
    """Create and return a store manager."""
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        name='Store Manager',
        role=UserRole.STORE_MANAGER,
        store=store,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as store manager."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def category(db):
    return Category.objects.create(code='10', name='ドリンク')


@pytest.fixture
def product(db, store, category):
    """Create and return an active product."""
    return Product.objects.create(
        store=store,
        category=category,
        name='ブレンドコーヒー',
        price=Decimal('450'),
        stock=10,
    )


@pytest.fixture
def archived_product(db, store):
    return Product.objects.create(
        store=store,
        name='Old Blend',
        price=Decimal('400'),
        status=ProductStatus.ARCHIVED,
    )


@pytest.fixture
def sales_records(db, store, other_store, product):
    """Three days of sales in two stores."""
    other_product = Product.objects.create(store=other_store, name='Latte', price=Decimal('500'))
    return [
        SalesRecord.objects.create(
            date=date(2025, 6, 16),
            store=store,
            product=product,
            quantity=10,
            unit_price=Decimal('450'),
            sales_amount=Decimal('4500'),
        ),
        SalesRecord.objects.create(
            date=date(2025, 6, 17),
            store=store,
            product=product,
            quantity=12,
            unit_price=Decimal('450'),
            sales_amount=Decimal('5400'),
        ),
        SalesRecord.objects.create(
            date=date(2025, 6, 18),
            store=other_store,
            product=other_product,
            quantity=3,
            unit_price=Decimal('500'),
            sales_amount=Decimal('1500'),
        ),
    ]


@pytest.fixture
def sales_csv():
    """POS export with two good rows."""
    return (
        SALES_CSV_HEADER
        + '2025/06/17(火),1001,ブレンドコーヒー,10,ドリンク,¥450,12,"¥5,400"\n'
        + '2025/06/17(火),2001,チーズケーキ,20,フード,¥520,"1,003","¥521,560"\n'
    )


@pytest.fixture
def product_csv():
    """Product master with a sub-categorised and a top-level product."""
    return (
        PRODUCT_CSV_HEADER
        + '1001,ブレンドコーヒー,10,ドリンク,101,ホット,¥450\n'
        + '2001,チーズケーキ,20,フード,,,"¥1,200"\n'
    )

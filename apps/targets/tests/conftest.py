import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.stores.models import Store
from apps.targets.models import AnnualTarget, MonthlyTarget, WeeklyTarget, DailyTarget


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def store(db):
    """Create and return a test store."""
    return Store.objects.create(name='Shibuya', address='Tokyo, Shibuya 1-1')


@pytest.fixture
def other_store(db):
    """Create and return a second store."""
    return Store.objects.create(name='Umeda', address='Osaka, Umeda 2-2')


@pytest.fixture
def manager(db, store):
    """Create and return a store manager."""
    return User.objects.create_user(
        email='manager@example.com',
        password='TestPass123!',
        name='Store Manager',
        role=UserRole.STORE_MANAGER,
        store=store,
    )


@pytest.fixture
def authenticated_client(api_client, manager):
    """Return API client authenticated as store manager."""
    refresh = RefreshToken.for_user(manager)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def annual_target(db, store):
    """Create and return an annual target for 2025."""
    return AnnualTarget.objects.create(
        year=2025,
        store=store,
        target_sales_amount=Decimal('1200000.00'),
        target_customer_count=600,
        target_total_items_sold=2400,
    )


@pytest.fixture
def monthly_target(db, annual_target):
    """Create and return the June share of the annual target."""
    return MonthlyTarget.objects.create(
        annual_target=annual_target,
        month=6,
        allocation_percentage=Decimal('0.5000'),
        target_sales_amount=Decimal('600000.00'),
        target_customer_count=300,
    )


@pytest.fixture
def second_monthly_target(db, annual_target):
    """Create and return the July share of the annual target."""
    return MonthlyTarget.objects.create(
        annual_target=annual_target,
        month=7,
        allocation_percentage=Decimal('0.2500'),
        target_sales_amount=Decimal('300000.00'),
        target_customer_count=150,
    )


@pytest.fixture
def weekly_target(db, monthly_target):
    """Create and return the first week of June."""
    return WeeklyTarget.objects.create(
        monthly_target=monthly_target,
        start_date=date(2025, 6, 2),
        end_date=date(2025, 6, 8),
        allocation_percentage=Decimal('0.2500'),
        target_sales_amount=Decimal('150000.00'),
        target_customer_count=75,
    )


@pytest.fixture
def daily_target(db, weekly_target):
    """Create and return the Monday of the first week."""
    return DailyTarget.objects.create(
        weekly_target=weekly_target,
        date=date(2025, 6, 2),
        allocation_percentage=Decimal('0.1000'),
        target_sales_amount=Decimal('15000.00'),
        target_customer_count=8,
    )

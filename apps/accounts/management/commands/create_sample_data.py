"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear] [--year 2025]

This creates:
- 1 store (テスト店舗)
- 2 users (admin, store manager)
- An annual target for the store split evenly over 12 months
- A few products with a week of sales records
"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_DOWN

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole
from apps.sales.models import Category, Product, SalesRecord
from apps.stores.models import Store, StoreStatus
from apps.targets.models import AnnualTarget, MonthlyTarget, WeeklyTarget, DailyTarget
from apps.targets.services import (
    create_annual_target,
    create_monthly_target,
    DuplicateTargetError,
)

ANNUAL_SALES = Decimal('12000000')
ANNUAL_CUSTOMERS = 6000

PRODUCTS = [
    ('ブレンドコーヒー', ('10', 'ドリンク'), Decimal('450')),
    ('カフェラテ', ('10', 'ドリンク'), Decimal('520')),
    ('チーズケーキ', ('20', 'フード'), Decimal('580')),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--year',
            type=int,
            default=date.today().year,
            help='Year of the sample annual target (default: current year)',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        store = self.create_store()
        self.create_users(store)
        self.create_targets(store, options['year'])
        self.create_sales(store)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@quonpass.com / admin123 (admin)')
        self.stdout.write('  test.user@quonpass.com / password123 (store manager)')

    def clear_data(self):
        """Clear all data from the database, children first."""
        DailyTarget.objects.all().delete()
        WeeklyTarget.objects.all().delete()
        MonthlyTarget.objects.all().delete()
        AnnualTarget.objects.all().delete()
        SalesRecord.objects.all().delete()
        Product.objects.all().delete()
        Category.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        Store.objects.all().delete()

    def create_store(self):
        self.stdout.write('  Creating store...')

        store, _ = Store.objects.get_or_create(
            name='テスト店舗',
            defaults={
                'address': '東京都渋谷区テスト1-1-1',
                'phone': '03-1234-5678',
                'email': 'test@quonpass.com',
                'status': StoreStatus.ACTIVE,
            }
        )
        return store

    def create_users(self, store):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@quonpass.com',
            defaults={
                'name': '管理者',
                'role': UserRole.ADMIN,
                'is_staff': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        manager, _ = User.objects.get_or_create(
            email='test.user@quonpass.com',
            defaults={
                'name': 'テストユーザー',
                'role': UserRole.STORE_MANAGER,
                'store': store,
            }
        )
        manager.set_password('password123')
        manager.save()

        return {'admin': admin, 'manager': manager}

    def create_targets(self, store, year):
        self.stdout.write(f'  Creating targets for {year}...')

        try:
            annual_target = create_annual_target(
                year=year,
                store_id=store.id,
                target_sales_amount=ANNUAL_SALES,
                target_customer_count=ANNUAL_CUSTOMERS,
            )
        except DuplicateTargetError:
            self.stdout.write(self.style.WARNING(f'  Annual target for {year} exists, skipping'))
            return

        # 12 x 0.0833 stays under 100%
        share = (Decimal('1') / 12).quantize(Decimal('0.0001'), rounding=ROUND_DOWN)
        for month in range(1, 13):
            create_monthly_target(
                annual_target_id=annual_target.id,
                month=month,
                allocation_percentage=share,
                target_sales_amount=(ANNUAL_SALES * share).quantize(Decimal('0.01')),
                target_customer_count=int(ANNUAL_CUSTOMERS * share),
            )

    def create_sales(self, store):
        self.stdout.write('  Creating products and sales records...')

        today = date.today()
        for index, (name, (category_code, category_name), price) in enumerate(PRODUCTS):
            category, _ = Category.objects.get_or_create(
                code=category_code,
                defaults={'name': category_name},
            )
            product, _ = Product.objects.get_or_create(
                store=store,
                name=name,
                defaults={
                    'category': category,
                    'description': f'{category_name} sample product',
                    'price': price,
                    'stock': 50,
                },
            )

            for days_ago in range(7):
                quantity = 10 + index * 3 + days_ago
                SalesRecord.objects.update_or_create(
                    date=today - timedelta(days=days_ago),
                    store=store,
                    product=product,
                    defaults={
                        'quantity': quantity,
                        'unit_price': price,
                        'sales_amount': price * quantity,
                    },
                )

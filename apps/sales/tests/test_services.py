"""
Service layer unit tests for sales app.

Tests cover:
- Product and sales record queries
- CSV parsing helpers
- CSV import upserts and partial success
- Category tree rules
- Product master import
"""

import io
import pytest
from datetime import date
from decimal import Decimal

from apps.sales.models import Category, Product, ProductStatus, SalesRecord
from apps.sales.services import (
    list_products,
    list_sales_records,
    import_sales_csv,
    import_products_csv,
    list_categories,
    create_category,
    parse_business_date,
    parse_amount,
    InvalidCsvError,
    InvalidCsvRowError,
    DuplicateCategoryError,
    InvalidCategoryError,
)
from apps.stores.services import StoreNotFoundError

from .conftest import PRODUCT_CSV_HEADER, SALES_CSV_HEADER


# =============================================================================
# Catalog Tests
# =============================================================================

@pytest.mark.django_db
class TestCatalog:
    """Tests for catalog.py service functions."""

    def test_list_products_active_only(self, product, archived_product):
        assert list(list_products()) == [product]

    def test_list_products_filters(self, product, other_store, category):
        assert list(list_products(store_id=other_store.id)) == []
        assert list(list_products(category_id=category.id)) == [product]

    def test_list_sales_records_newest_first(self, sales_records):
        records = list(list_sales_records())

        assert [r.date for r in records] == [
            date(2025, 6, 18),
            date(2025, 6, 17),
            date(2025, 6, 16),
        ]

    def test_list_sales_records_date_range(self, sales_records, store):
        """Both bounds are inclusive."""
        records = list_sales_records(
            start_date=date(2025, 6, 17),
            end_date=date(2025, 6, 18),
            store_id=store.id,
        )

        assert [r.date for r in records] == [date(2025, 6, 17)]


# =============================================================================
# CSV Parsing Tests
# =============================================================================

class TestCsvParsing:
    """Tests for the POS cell parsers."""

    def test_parse_business_date_with_weekday(self):
        assert parse_business_date('2025/06/17(火)') == date(2025, 6, 17)

    def test_parse_business_date_without_padding(self):
        assert parse_business_date('2025/6/7') == date(2025, 6, 7)

    def test_parse_business_date_invalid(self):
        with pytest.raises(InvalidCsvRowError):
            parse_business_date('yesterday')

    def test_parse_amount_strips_yen_and_commas(self):
        assert parse_amount('¥1,234,567', '売上金額') == Decimal('1234567')

    def test_parse_amount_invalid(self):
        with pytest.raises(InvalidCsvRowError):
            parse_amount('abc', '売上数量')


# =============================================================================
# CSV Import Tests
# =============================================================================

@pytest.mark.django_db
class TestImportSalesCsv:
    """Tests for csv_import.py service functions."""

    def test_import_creates_products_and_records(self, store, sales_csv):
        result = import_sales_csv(store_id=store.id, file=io.BytesIO(sales_csv.encode('utf-8')))

        assert result.imported_count == 2
        assert result.errors == []

        cake = Product.objects.get(store=store, name='チーズケーキ')
        assert cake.price == Decimal('520')
        assert cake.stock == 0
        assert cake.status == ProductStatus.ACTIVE
        assert cake.category.name == 'フード'
        assert cake.description == 'CSV import: フード'

        record = SalesRecord.objects.get(product=cake)
        assert record.date == date(2025, 6, 17)
        assert record.quantity == 1003
        assert record.sales_amount == Decimal('521560')

    def test_import_twice_updates_in_place(self, store, sales_csv):
        """Re-importing the same file leaves one product and record per row."""
        import_sales_csv(store_id=store.id, file=io.BytesIO(sales_csv.encode('utf-8')))
        import_sales_csv(store_id=store.id, file=io.BytesIO(sales_csv.encode('utf-8')))

        assert Product.objects.filter(store=store).count() == 2
        assert SalesRecord.objects.filter(store=store).count() == 2
        assert Category.objects.count() == 2

    def test_import_links_category_by_code(self, store, category, sales_csv):
        """A known code wins over the name in the file."""
        category.name = 'Drinks'
        category.save()

        import_sales_csv(store_id=store.id, file=io.BytesIO(sales_csv.encode('utf-8')))

        coffee = Product.objects.get(store=store, name='ブレンドコーヒー')
        assert coffee.category == category
        assert Category.objects.get(code='20').level == 1
        assert Category.objects.count() == 2

    def test_import_updates_existing_product(self, store, product, sales_csv):
        import_sales_csv(store_id=store.id, file=io.BytesIO(sales_csv.encode('utf-8')))

        product.refresh_from_db()
        assert product.stock == 0
        assert Product.objects.filter(store=store, name=product.name).count() == 1

    def test_import_shift_jis(self, store):
        """Shift_JIS exports use the full-width yen sign."""
        content = SALES_CSV_HEADER + '2025/06/17(火),1001,ブレンドコーヒー,10,ドリンク,￥450,12,"￥5,400"\n'
        result = import_sales_csv(store_id=store.id, file=io.BytesIO(content.encode('cp932')))

        assert result.imported_count == 1
        assert SalesRecord.objects.get().sales_amount == Decimal('5400')

    def test_bad_rows_do_not_abort_import(self, store):
        """Bad rows are collected; good rows are still imported."""
        content = (
            SALES_CSV_HEADER
            + 'not a date,1001,ブレンドコーヒー,10,ドリンク,¥450,12,"¥5,400"\n'
            + '2025/06/18(水),1001,ブレンドコーヒー,10,ドリンク,¥450,abc,"¥5,400"\n'
            + '2025/06/19(木),1001,ブレンドコーヒー,,,¥450,2,¥900\n'
        )
        result = import_sales_csv(store_id=store.id, file=io.StringIO(content))

        assert result.imported_count == 1
        assert [error['row'] for error in result.errors] == [2, 3]
        assert 'Invalid date' in result.errors[0]['message']
        assert SalesRecord.objects.get().date == date(2025, 6, 19)
        assert Product.objects.get().category is None
        assert '2 rows had errors' in result.message

    def test_import_unknown_store(self, db, sales_csv):
        with pytest.raises(StoreNotFoundError):
            import_sales_csv(store_id=999999, file=io.StringIO(sales_csv))

    def test_import_missing_columns(self, store):
        with pytest.raises(InvalidCsvError, match='売上金額'):
            import_sales_csv(
                store_id=store.id,
                file=io.StringIO('営業日,商品名,平均単価,売上数量\n2025/06/17,Coffee,450,1\n'),
            )


# =============================================================================
# Category Tests
# =============================================================================

@pytest.mark.django_db
class TestCategories:
    """Tests for categories.py service functions."""

    def test_create_sub_category(self, category):
        hot = create_category(code='101', name='ホット', level=2, parent_id=category.id)

        assert hot.parent == category
        assert hot.status == ProductStatus.ACTIVE
        assert list(category.children.all()) == [hot]

    def test_create_duplicate_code(self, category):
        """Codes are unique across levels."""
        with pytest.raises(DuplicateCategoryError):
            create_category(code='10', name='ホット', level=2, parent_id=category.id)

    def test_level_one_has_no_parent(self, category):
        with pytest.raises(InvalidCategoryError):
            create_category(code='30', name='グッズ', level=1, parent_id=category.id)

    def test_parent_must_be_one_level_up(self, category):
        hot = create_category(code='101', name='ホット', level=2, parent_id=category.id)

        with pytest.raises(InvalidCategoryError):
            create_category(code='1011', name='Small', level=2, parent_id=hot.id)

    def test_list_categories_active_by_level_and_code(self, category):
        food = create_category(code='05', name='フード')
        hot = create_category(code='101', name='ホット', level=2, parent_id=category.id)
        Category.objects.filter(id=food.id).update(status=ProductStatus.INACTIVE)

        assert list(list_categories()) == [category, hot]


# =============================================================================
# Product Master Import Tests
# =============================================================================

@pytest.mark.django_db
class TestImportProductsCsv:
    """Tests for product_import.py service functions."""

    def test_import_builds_category_tree(self, store, product_csv):
        result = import_products_csv(store_id=store.id, file=io.BytesIO(product_csv.encode('utf-8')))

        assert result.imported_count == 2
        assert result.message == 'Imported 2 products successfully.'

        drinks = Category.objects.get(code='10')
        hot = Category.objects.get(code='101')
        assert (drinks.level, drinks.parent) == (1, None)
        assert (hot.level, hot.parent) == (2, drinks)

        coffee = Product.objects.get(store=store, name='ブレンドコーヒー')
        assert coffee.category == hot
        assert coffee.description == 'CSV import: ドリンク / ホット'
        assert coffee.price == Decimal('450')
        assert coffee.image_url == 'no-image.jpg'

        cake = Product.objects.get(store=store, name='チーズケーキ')
        assert cake.category.code == '20'
        assert cake.description == 'CSV import: フード'
        assert cake.price == Decimal('1200')

    def test_import_twice_updates_in_place(self, store, product_csv):
        import_products_csv(store_id=store.id, file=io.StringIO(product_csv))
        import_products_csv(store_id=store.id, file=io.StringIO(product_csv))

        assert Product.objects.filter(store=store).count() == 2
        assert Category.objects.count() == 3

    def test_existing_category_keeps_its_name(self, store, category, product_csv):
        category.name = 'Drinks'
        category.save()

        import_products_csv(store_id=store.id, file=io.StringIO(product_csv))

        category.refresh_from_db()
        assert category.name == 'Drinks'
        assert Category.objects.get(code='101').parent == category

    def test_missing_price_is_zero(self, store):
        content = PRODUCT_CSV_HEADER + '3001,ステッカー,30,グッズ,,,\n'
        result = import_products_csv(store_id=store.id, file=io.StringIO(content))

        assert result.imported_count == 1
        assert Product.objects.get().price == Decimal('0')

    def test_bad_rows_do_not_abort_import(self, store, product_csv):
        content = (
            product_csv
            + '3001,ステッカー,,グッズ,,,¥100\n'
            + '3002,マグ,30,グッズ,,,abc\n'
            + '3003,タンブラー,101,ホット,,,¥2000\n'
        )
        result = import_products_csv(store_id=store.id, file=io.StringIO(content))

        assert result.imported_count == 2
        assert [error['row'] for error in result.errors] == [4, 5, 6]
        assert 'Category 1 code is empty' in result.errors[0]['message']
        assert 'level 2' in result.errors[2]['message']
        assert not Category.objects.filter(code='30').exists()
        assert '3 rows had errors' in result.message

    def test_import_unknown_store(self, db, product_csv):
        with pytest.raises(StoreNotFoundError):
            import_products_csv(store_id=999999, file=io.StringIO(product_csv))

    def test_import_missing_columns(self, store):
        with pytest.raises(InvalidCsvError, match='カテゴリ1'):
            import_products_csv(store_id=store.id, file=io.StringIO('商品名,平均単価\nCoffee,450\n'))

"""
Product master CSV import service.

Reads the product master export of the POS register. One row is one
product with its one or two category levels:

    商品コード,商品名,カテゴリ1コード,カテゴリ1,カテゴリ2コード,カテゴリ2,平均単価
    1001,ブレンドコーヒー,10,ドリンク,101,ホット,¥450

Categories are created on first sight, keyed by code. Products are
matched by (name, store) and overwritten, like the sales import does.
"""

import logging
from decimal import Decimal
from typing import Dict

from django.utils import timezone

from apps.stores.models import Store

from ..models import Product, ProductStatus
from .categories import upsert_category
from .csv_import import (
    COLUMN_CATEGORY,
    COLUMN_CATEGORY_CODE,
    COLUMN_PRODUCT_NAME,
    COLUMN_UNIT_PRICE,
    DEFAULT_IMAGE_URL,
    ImportResult,
    get_import_store,
    import_rows,
    parse_amount,
    read_csv,
)
from .exceptions import InvalidCsvRowError

logger = logging.getLogger(__name__)

COLUMN_SUBCATEGORY_CODE = 'カテゴリ2コード'
COLUMN_SUBCATEGORY = 'カテゴリ2'

REQUIRED_COLUMNS = (
    COLUMN_PRODUCT_NAME,
    COLUMN_CATEGORY_CODE,
    COLUMN_CATEGORY,
)


def _cell(row: Dict[str, str], column: str) -> str:
    return (row.get(column) or '').strip()


def _import_row(store: Store, row: Dict[str, str]) -> Product:
    name = _cell(row, COLUMN_PRODUCT_NAME)
    if not name:
        raise InvalidCsvRowError("Product name is empty")

    category_code = _cell(row, COLUMN_CATEGORY_CODE)
    if not category_code:
        raise InvalidCsvRowError("Category 1 code is empty")

    price_text = _cell(row, COLUMN_UNIT_PRICE)
    price = parse_amount(price_text, COLUMN_UNIT_PRICE) if price_text else Decimal('0')
    if price < 0:
        raise InvalidCsvRowError(f"Price must not be negative: {price_text!r}")

    category_name = _cell(row, COLUMN_CATEGORY)
    category = upsert_category(code=category_code, name=category_name, level=1)

    description = f"CSV import: {category_name}"
    subcategory_code = _cell(row, COLUMN_SUBCATEGORY_CODE)
    if subcategory_code:
        subcategory_name = _cell(row, COLUMN_SUBCATEGORY)
        category = upsert_category(
            code=subcategory_code,
            name=subcategory_name,
            level=2,
            parent=category,
        )
        if subcategory_name:
            description = f"{description} / {subcategory_name}"

    product = Product.objects.filter(store=store, name=name).order_by('id').first()
    if product is None:
        product = Product(store=store, name=name)

    product.category = category
    product.description = description
    product.image_url = DEFAULT_IMAGE_URL
    product.price = price
    product.stock = 0
    product.status = ProductStatus.ACTIVE
    product.available_at = timezone.now()
    product.save()
    return product


def import_products_csv(*, store_id: int, file) -> ImportResult:
    """
    Import a POS product master into a store.

    A missing price is read as 0. Each row runs in its own savepoint, so
    bad rows are reported without stopping the import.

    Raises:
        StoreNotFoundError: If store doesn't exist
        InvalidCsvError: If the file can't be decoded or lacks required columns
    """
    store = get_import_store(store_id)
    reader = read_csv(file, REQUIRED_COLUMNS)

    result = import_rows(reader, lambda row: _import_row(store, row), ImportResult(noun='products'))

    logger.info(
        "Imported product CSV for store %s: %s products, %s errors",
        store_id, result.imported_count, result.error_count,
    )
    return result

"""
Sales CSV import service.

Reads the daily sales export of the POS register. One row is one product
on one business day:

    営業日,商品コード,商品名,カテゴリ1コード,カテゴリ1,平均単価,売上数量,売上金額
    2025/06/17(火),1001,ブレンドコーヒー,10,ドリンク,¥450,12,"¥5,400"

Products are matched by (name, store) and sales records by
(date, store, product); matches are overwritten, so importing the same
file twice leaves the same data behind. A category code links the
product to that level-1 category, created on first sight.

The reading helpers here are shared with the product master import.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Optional, Sequence

from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.stores.models import Store
from apps.stores.services import StoreNotFoundError

from ..models import Category, Product, ProductStatus, SalesRecord
from .categories import upsert_category
from .exceptions import InvalidCsvError, InvalidCsvRowError

logger = logging.getLogger(__name__)

COLUMN_DATE = '営業日'
COLUMN_PRODUCT_CODE = '商品コード'
COLUMN_PRODUCT_NAME = '商品名'
COLUMN_CATEGORY_CODE = 'カテゴリ1コード'
COLUMN_CATEGORY = 'カテゴリ1'
COLUMN_UNIT_PRICE = '平均単価'
COLUMN_QUANTITY = '売上数量'
COLUMN_SALES_AMOUNT = '売上金額'

REQUIRED_COLUMNS = (
    COLUMN_DATE,
    COLUMN_PRODUCT_NAME,
    COLUMN_UNIT_PRICE,
    COLUMN_QUANTITY,
    COLUMN_SALES_AMOUNT,
)

UNCATEGORIZED = '未分類'
DEFAULT_IMAGE_URL = 'no-image.jpg'

# POS exports are UTF-8 (optionally with BOM) or Shift_JIS
ENCODINGS = ('utf-8-sig', 'cp932')


@dataclass
class ImportResult:
    """Outcome of one CSV import."""

    imported_count: int = 0
    errors: List[Dict] = field(default_factory=list)
    noun: str = 'records'

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def message(self) -> str:
        if self.errors:
            return (
                f"Imported {self.imported_count} {self.noun}. "
                f"{self.error_count} rows had errors."
            )
        return f"Imported {self.imported_count} {self.noun} successfully."


def parse_business_date(value: str) -> date:
    """
    Parse a POS business date such as '2025/06/17(火)'.

    The weekday suffix is dropped and slashes are read as dashes.
    """
    text = (value or '').split('(')[0].strip().replace('/', '-')
    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError:
        raise InvalidCsvRowError(f"Invalid date: {value!r}")


def parse_amount(value: str, column: str) -> Decimal:
    """Parse a money or count cell, ignoring '¥' and thousands separators."""
    text = (value or '').replace('¥', '').replace('￥', '').replace(',', '').strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidCsvRowError(f"Invalid number in {column}: {value!r}")
    if not amount.is_finite():
        raise InvalidCsvRowError(f"Invalid number in {column}: {value!r}")
    return amount


def _read_text(file) -> str:
    content = file.read()
    if isinstance(content, str):
        return content

    for encoding in ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise InvalidCsvError("File is not UTF-8 or Shift_JIS encoded text")


def _get_category(row: Dict[str, str]) -> Optional[Category]:
    code = (row.get(COLUMN_CATEGORY_CODE) or '').strip()
    if not code:
        return None
    return upsert_category(code=code, name=(row.get(COLUMN_CATEGORY) or '').strip(), level=1)


def _import_row(store: Store, row: Dict[str, str]) -> SalesRecord:
    name = (row.get(COLUMN_PRODUCT_NAME) or '').strip()
    if not name:
        raise InvalidCsvRowError("Product name is empty")

    record_date = parse_business_date(row.get(COLUMN_DATE))
    quantity = parse_amount(row.get(COLUMN_QUANTITY), COLUMN_QUANTITY)
    unit_price = parse_amount(row.get(COLUMN_UNIT_PRICE), COLUMN_UNIT_PRICE)
    sales_amount = parse_amount(row.get(COLUMN_SALES_AMOUNT), COLUMN_SALES_AMOUNT)

    if quantity != quantity.to_integral_value():
        raise InvalidCsvRowError(f"Quantity must be a whole number: {row.get(COLUMN_QUANTITY)!r}")

    category_name = (row.get(COLUMN_CATEGORY) or '').strip()

    product = Product.objects.filter(store=store, name=name).order_by('id').first()
    if product is None:
        product = Product(store=store, name=name)

    product.category = _get_category(row)
    product.description = f"CSV import: {category_name or UNCATEGORIZED}"
    product.image_url = DEFAULT_IMAGE_URL
    product.price = unit_price
    product.stock = 0
    product.status = ProductStatus.ACTIVE
    product.available_at = timezone.now()
    product.save()

    record, _ = SalesRecord.objects.update_or_create(
        date=record_date,
        store=store,
        product=product,
        defaults={
            'quantity': int(quantity),
            'unit_price': unit_price,
            'sales_amount': sales_amount,
            'customer_attribute': None,
        },
    )
    return record


def get_import_store(store_id: int) -> Store:
    try:
        return Store.objects.get(id=store_id)
    except Store.DoesNotExist:
        raise StoreNotFoundError(f"Store with ID {store_id} not found")


def read_csv(file, required_columns: Sequence[str]) -> csv.DictReader:
    """
    Decode an uploaded CSV and check its header.

    Raises:
        InvalidCsvError: If the file can't be decoded or lacks required columns
    """
    reader = csv.DictReader(io.StringIO(_read_text(file)))

    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    missing = [column for column in required_columns if column not in fieldnames]
    if missing:
        raise InvalidCsvError(f"Missing required columns: {', '.join(missing)}")
    reader.fieldnames = fieldnames
    return reader


def import_rows(
    reader: csv.DictReader,
    import_row: Callable[[Dict[str, str]], object],
    result: ImportResult
) -> ImportResult:
    """
    Run import_row for every non-blank row, one savepoint per row.

    A bad row is recorded in result.errors and the remaining rows are
    still imported. Row numbers count the header as row 1.
    """
    for row_number, row in enumerate(reader, start=2):
        if not any((value or '').strip() for value in row.values() if isinstance(value, str)):
            continue

        try:
            with transaction.atomic():
                import_row(row)
        except (InvalidCsvRowError, DatabaseError) as e:
            logger.warning("Skipped CSV row %s: %s", row_number, e)
            result.errors.append({
                'row': row_number,
                'data': {key: value for key, value in row.items() if key is not None},
                'message': str(e),
            })
            continue

        result.imported_count += 1

    return result


def import_sales_csv(*, store_id: int, file) -> ImportResult:
    """
    Import a POS sales export into a store.

    Args:
        store_id: Store the sales belong to
        file: Binary or text file object holding the CSV

    Returns:
        ImportResult with imported count and per-row errors

    Raises:
        StoreNotFoundError: If store doesn't exist
        InvalidCsvError: If the file can't be decoded or lacks required columns
    """
    store = get_import_store(store_id)
    reader = read_csv(file, REQUIRED_COLUMNS)

    result = import_rows(reader, lambda row: _import_row(store, row), ImportResult())

    logger.info(
        "Imported sales CSV for store %s: %s rows, %s errors",
        store_id, result.imported_count, result.error_count,
    )
    return result

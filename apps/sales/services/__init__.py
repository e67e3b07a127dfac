"""
Sales app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    SalesServiceError,
    InvalidCsvError,
    InvalidCsvRowError,
    DuplicateCategoryError,
    InvalidCategoryError,
)

from .catalog import (
    list_products,
    list_sales_records,
)

from .categories import (
    list_categories,
    create_category,
    upsert_category,
)

from .csv_import import (
    ImportResult,
    import_sales_csv,
    parse_business_date,
    parse_amount,
)

from .product_import import import_products_csv


__all__ = [
    # Exceptions
    'SalesServiceError',
    'InvalidCsvError',
    'InvalidCsvRowError',
    'DuplicateCategoryError',
    'InvalidCategoryError',

    # Catalog
    'list_products',
    'list_sales_records',

    # Categories
    'list_categories',
    'create_category',
    'upsert_category',

    # CSV Import
    'ImportResult',
    'import_sales_csv',
    'import_products_csv',
    'parse_business_date',
    'parse_amount',
]

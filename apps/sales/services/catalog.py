"""Read-side queries for products and sales records."""

from datetime import date
from typing import Optional

from ..models import Product, ProductStatus, SalesRecord


def list_products(*, store_id: Optional[int] = None, category_id: Optional[int] = None):
    """
    List active products ordered by name.

    Args:
        store_id: Only products of this store (optional)
        category_id: Only products in this category (optional)

    Returns:
        QuerySet of Product with category and store joined
    """
    queryset = (
        Product.objects
        .filter(status=ProductStatus.ACTIVE)
        .select_related('category', 'store')
    )

    if store_id is not None:
        queryset = queryset.filter(store_id=store_id)
    if category_id is not None:
        queryset = queryset.filter(category_id=category_id)

    return queryset.order_by('name', 'id')


def list_sales_records(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    store_id: Optional[int] = None
):
    """
    List sales records, newest first.

    Both date bounds are inclusive.
    """
    queryset = SalesRecord.objects.select_related('store', 'product')

    if start_date is not None:
        queryset = queryset.filter(date__gte=start_date)
    if end_date is not None:
        queryset = queryset.filter(date__lte=end_date)
    if store_id is not None:
        queryset = queryset.filter(store_id=store_id)

    return queryset.order_by('-date', 'store_id', 'product__name')

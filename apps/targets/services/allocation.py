"""
Allocation bookkeeping shared by every level of the target tree.

Children of one parent split the parent's goal by ``allocation_percentage``.
Their sum may be below 1 while planning is in progress but never above it.
"""

from decimal import Decimal
from typing import Iterable, Optional

from django.db.models import QuerySet, Sum

from .exceptions import AllocationExceededError

ALLOCATION_LIMIT = Decimal('1')
ALLOCATION_STEP = Decimal('0.0001')

AMOUNT_FIELDS = (
    'target_sales_amount',
    'target_customer_count',
    'target_total_items_sold',
)


def allocated_total(siblings: QuerySet, *, exclude_id: Optional[int] = None) -> Decimal:
    """Sum of allocation_percentage over ``siblings``, optionally skipping one row."""
    if exclude_id is not None:
        siblings = siblings.exclude(id=exclude_id)
    total = siblings.aggregate(total=Sum('allocation_percentage'))['total']
    return total if total is not None else Decimal('0')


def check_allocation_total(
    siblings: QuerySet,
    allocation_percentage: Decimal,
    *,
    exclude_id: Optional[int] = None
) -> Decimal:
    """
    Validate that adding ``allocation_percentage`` keeps the siblings within 100%.

    Args:
        siblings: Children of the parent the row is being written under
        allocation_percentage: Share of the row being written
        exclude_id: ID of the row itself when it is being updated

    Returns:
        The resulting total allocation of the parent

    Raises:
        AllocationExceededError: If the total would exceed 1
    """
    already_allocated = allocated_total(siblings, exclude_id=exclude_id)
    total = already_allocated + Decimal(str(allocation_percentage))
    if total > ALLOCATION_LIMIT:
        raise AllocationExceededError(
            f"Allocation total {total.quantize(ALLOCATION_STEP)} exceeds 1 "
            f"(already allocated: {already_allocated.quantize(ALLOCATION_STEP)})"
        )
    return total


def apply_fields(instance, fields: dict, allowed: Iterable[str]) -> list:
    """
    Copy the provided ``fields`` onto ``instance``.

    Returns:
        update_fields list for ``save()``, always including updated_at
    """
    update_fields = ['updated_at']
    for name in allowed:
        if name in fields:
            setattr(instance, name, fields[name])
            update_fields.append(name)
    return update_fields

"""
Monthly target management service.

Monthly targets split an annual target by calendar month; each one
carries the fraction of the annual goal it represents.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError

from apps.targets.models import AnnualTarget, MonthlyTarget, WeeklyTarget, DailyTarget

from .allocation import AMOUNT_FIELDS, apply_fields, check_allocation_total
from .exceptions import (
    DuplicateTargetError,
    InvalidReferenceError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)

MONTHLY_UPDATABLE_FIELDS = ('annual_target_id', 'month', 'allocation_percentage') + AMOUNT_FIELDS


def _monthly_targets_with_tree():
    return (
        MonthlyTarget.objects
        .select_related('annual_target__store')
        .prefetch_related('weekly_targets__daily_targets')
    )


def _duplicate_message(annual_target_id: int, month: int) -> str:
    return f"Monthly target for annual target {annual_target_id}, month {month} already exists"


def _lock_annual_target(annual_target_id: int) -> AnnualTarget:
    # Locking the parent serializes allocation checks between siblings
    try:
        return AnnualTarget.objects.select_for_update().get(id=annual_target_id)
    except AnnualTarget.DoesNotExist:
        raise InvalidReferenceError(f"Annual target with ID {annual_target_id} does not exist")


def _lock_annual_targets(*annual_target_ids: int) -> dict:
    # Parents are locked before children, lowest id first
    return {
        annual_target_id: _lock_annual_target(annual_target_id)
        for annual_target_id in sorted(set(annual_target_ids))
    }


def _current_annual_target_id(target_id: int) -> int:
    annual_target_id = (
        MonthlyTarget.objects
        .filter(id=target_id)
        .values_list('annual_target_id', flat=True)
        .first()
    )
    if annual_target_id is None:
        raise TargetNotFoundError(f"Monthly target with ID {target_id} not found")
    return annual_target_id


def list_monthly_targets(*, annual_target_id: Optional[int] = None):
    """
    List monthly targets with parent chain and children loaded.

    Args:
        annual_target_id: Only children of this annual target (optional)

    Returns:
        QuerySet ordered by month
    """
    queryset = _monthly_targets_with_tree()

    if annual_target_id is not None:
        queryset = queryset.filter(annual_target_id=annual_target_id)

    return queryset.order_by('month', 'annual_target_id')


def get_monthly_target(*, target_id: int) -> MonthlyTarget:
    """
    Get a monthly target with parent chain and children joined.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    try:
        return _monthly_targets_with_tree().get(id=target_id)
    except MonthlyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Monthly target with ID {target_id} not found")


@transaction.atomic
def create_monthly_target(
    *,
    annual_target_id: int,
    month: int,
    allocation_percentage: Decimal,
    target_sales_amount: Decimal,
    target_customer_count: int,
    target_total_items_sold: Optional[int] = None
) -> MonthlyTarget:
    """
    Allocate part of an annual target to a month.

    Args:
        annual_target_id: Parent annual target
        month: Calendar month (1-12)
        allocation_percentage: Fraction of the annual goal (0-1)
        target_sales_amount: Monthly sales goal
        target_customer_count: Monthly customer goal
        target_total_items_sold: Monthly items-sold goal (optional)

    Returns:
        Created MonthlyTarget joined with annual target and store

    Raises:
        DuplicateTargetError: If the month is already allocated
        InvalidReferenceError: If the annual target doesn't exist
        AllocationExceededError: If the months would exceed 100% of the year
    """
    if MonthlyTarget.objects.filter(annual_target_id=annual_target_id, month=month).exists():
        logger.warning(
            "Rejected duplicate monthly target annual_target=%s month=%s",
            annual_target_id, month,
        )
        raise DuplicateTargetError(_duplicate_message(annual_target_id, month))

    annual_target = _lock_annual_target(annual_target_id)

    check_allocation_total(annual_target.monthly_targets.all(), allocation_percentage)

    try:
        with transaction.atomic():
            target = MonthlyTarget.objects.create(
                annual_target=annual_target,
                month=month,
                allocation_percentage=allocation_percentage,
                target_sales_amount=target_sales_amount,
                target_customer_count=target_customer_count,
                target_total_items_sold=target_total_items_sold,
            )
    except IntegrityError:
        raise DuplicateTargetError(_duplicate_message(annual_target_id, month))

    logger.info(
        "Created monthly target %s (annual_target=%s month=%s allocation=%s)",
        target.id, annual_target_id, month, allocation_percentage,
    )
    return get_monthly_target(target_id=target.id)


@transaction.atomic
def update_monthly_target(*, target_id: int, **fields) -> MonthlyTarget:
    """
    Overwrite the provided fields of a monthly target.

    Moving the target to another annual target or month re-checks
    uniqueness; changing the parent or the share re-checks the parent's
    allocation total.

    Args:
        target_id: ID of the monthly target
        **fields: Any of annual_target_id, month, allocation_percentage,
            target_sales_amount, target_customer_count, target_total_items_sold

    Returns:
        Updated MonthlyTarget joined with annual target and store

    Raises:
        TargetNotFoundError: If target doesn't exist
        InvalidReferenceError: If a new annual_target_id doesn't exist
        DuplicateTargetError: If the new (annual target, month) pair is taken
        AllocationExceededError: If the parent would exceed 100%
    """
    current_annual_target_id = _current_annual_target_id(target_id)
    annual_target_id = fields.get('annual_target_id', current_annual_target_id)
    parents = _lock_annual_targets(current_annual_target_id, annual_target_id)
    parent = parents[annual_target_id]

    try:
        target = MonthlyTarget.objects.select_for_update().get(id=target_id)
    except MonthlyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Monthly target with ID {target_id} not found")

    month = fields.get('month', target.month)
    allocation_percentage = fields.get('allocation_percentage', target.allocation_percentage)

    if (annual_target_id, month) != (target.annual_target_id, target.month):
        taken = (
            MonthlyTarget.objects
            .filter(annual_target_id=annual_target_id, month=month)
            .exclude(id=target.id)
            .exists()
        )
        if taken:
            raise DuplicateTargetError(_duplicate_message(annual_target_id, month))

    if 'annual_target_id' in fields or 'allocation_percentage' in fields:
        check_allocation_total(
            parent.monthly_targets.all(),
            allocation_percentage,
            exclude_id=target.id,
        )

    update_fields = apply_fields(target, fields, MONTHLY_UPDATABLE_FIELDS)

    try:
        with transaction.atomic():
            target.save(update_fields=update_fields)
    except IntegrityError:
        raise DuplicateTargetError(_duplicate_message(annual_target_id, month))

    logger.info("Updated monthly target %s fields=%s", target.id, update_fields[1:])
    return get_monthly_target(target_id=target.id)


@transaction.atomic
def delete_monthly_target(*, target_id: int) -> None:
    """
    Delete a monthly target together with its weekly and daily targets.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    _lock_annual_target(_current_annual_target_id(target_id))

    try:
        target = MonthlyTarget.objects.select_for_update().get(id=target_id)
    except MonthlyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Monthly target with ID {target_id} not found")

    daily_count, _ = DailyTarget.objects.filter(weekly_target__monthly_target_id=target.id).delete()
    weekly_count, _ = WeeklyTarget.objects.filter(monthly_target_id=target.id).delete()

    target.delete()

    logger.info(
        "Deleted monthly target %s with %s weekly, %s daily targets",
        target_id, weekly_count, daily_count,
    )

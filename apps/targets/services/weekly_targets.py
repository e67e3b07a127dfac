"""Weekly target management service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError

from apps.targets.models import MonthlyTarget, WeeklyTarget, DailyTarget

from .allocation import check_allocation_total
from .exceptions import (
    DuplicateTargetError,
    InvalidDateRangeError,
    InvalidReferenceError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)


def _weekly_targets_with_tree():
    return (
        WeeklyTarget.objects
        .select_related('monthly_target__annual_target__store')
        .prefetch_related('daily_targets')
    )


def list_weekly_targets(*, monthly_target_id: Optional[int] = None):
    """Weekly targets ordered by start date, daily targets prefetched."""
    queryset = _weekly_targets_with_tree()
    if monthly_target_id is not None:
        queryset = queryset.filter(monthly_target_id=monthly_target_id)
    return queryset.order_by('start_date', 'monthly_target_id')


def get_weekly_target(*, target_id: int) -> WeeklyTarget:
    try:
        return _weekly_targets_with_tree().get(id=target_id)
    except WeeklyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Weekly target with ID {target_id} not found")


@transaction.atomic
def create_weekly_target(
    *,
    monthly_target_id: int,
    start_date: date,
    end_date: date,
    allocation_percentage: Decimal,
    target_sales_amount: Decimal,
    target_customer_count: int,
    target_total_items_sold: Optional[int] = None
) -> WeeklyTarget:
    """
    Allocate part of a monthly target to a date range.

    Raises:
        InvalidDateRangeError: If end_date is before start_date
            or either date falls outside the monthly target's month
        DuplicateTargetError: If a week starting on start_date exists
        InvalidReferenceError: If the monthly target doesn't exist
        AllocationExceededError: If the weeks would exceed 100% of the month
    """
    if end_date < start_date:
        raise InvalidDateRangeError(f"End date {end_date} is before start date {start_date}")

    duplicate_message = (
        f"Weekly target for monthly target {monthly_target_id} "
        f"starting {start_date} already exists"
    )
    if WeeklyTarget.objects.filter(monthly_target_id=monthly_target_id, start_date=start_date).exists():
        raise DuplicateTargetError(duplicate_message)

    try:
        monthly_target = MonthlyTarget.objects.select_for_update().get(id=monthly_target_id)
    except MonthlyTarget.DoesNotExist:
        raise InvalidReferenceError(f"Monthly target with ID {monthly_target_id} does not exist")

    for day in (start_date, end_date):
        if not monthly_target.covers(day):
            raise InvalidDateRangeError(
                f"Date {day} is outside month {monthly_target.month:02d} of the monthly target"
            )

    check_allocation_total(monthly_target.weekly_targets.all(), allocation_percentage)

    try:
        with transaction.atomic():
            target = WeeklyTarget.objects.create(
                monthly_target=monthly_target,
                start_date=start_date,
                end_date=end_date,
                allocation_percentage=allocation_percentage,
                target_sales_amount=target_sales_amount,
                target_customer_count=target_customer_count,
                target_total_items_sold=target_total_items_sold,
            )
    except IntegrityError:
        raise DuplicateTargetError(duplicate_message)

    logger.info(
        "Created weekly target %s (monthly_target=%s %s..%s)",
        target.id, monthly_target_id, start_date, end_date,
    )
    return get_weekly_target(target_id=target.id)


@transaction.atomic
def delete_weekly_target(*, target_id: int) -> None:
    """
    Delete a weekly target together with its daily targets.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    try:
        target = WeeklyTarget.objects.select_for_update().get(id=target_id)
    except WeeklyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Weekly target with ID {target_id} not found")

    daily_count, _ = DailyTarget.objects.filter(weekly_target_id=target.id).delete()
    target.delete()

    logger.info("Deleted weekly target %s with %s daily targets", target_id, daily_count)

"""Daily target management service."""

import logging
import datetime
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError

from apps.targets.models import WeeklyTarget, DailyTarget

from .allocation import check_allocation_total
from .exceptions import (
    DuplicateTargetError,
    InvalidDateRangeError,
    InvalidReferenceError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)


def list_daily_targets(*, weekly_target_id: Optional[int] = None):
    queryset = DailyTarget.objects.select_related('weekly_target')
    if weekly_target_id is not None:
        queryset = queryset.filter(weekly_target_id=weekly_target_id)
    return queryset.order_by('date', 'weekly_target_id')


def get_daily_target(*, target_id: int) -> DailyTarget:
    try:
        return DailyTarget.objects.select_related('weekly_target').get(id=target_id)
    except DailyTarget.DoesNotExist:
        raise TargetNotFoundError(f"Daily target with ID {target_id} not found")


@transaction.atomic
def create_daily_target(
    *,
    weekly_target_id: int,
    date: datetime.date,
    allocation_percentage: Decimal,
    target_sales_amount: Decimal,
    target_customer_count: int,
    target_total_items_sold: Optional[int] = None
) -> DailyTarget:
    """
    Allocate part of a weekly target to a single day.

    Raises:
        DuplicateTargetError: If the day is already allocated
        InvalidReferenceError: If the weekly target doesn't exist
        InvalidDateRangeError: If the day lies outside the week
        AllocationExceededError: If the days would exceed 100% of the week
    """
    duplicate_message = f"Daily target for weekly target {weekly_target_id} on {date} already exists"
    if DailyTarget.objects.filter(weekly_target_id=weekly_target_id, date=date).exists():
        raise DuplicateTargetError(duplicate_message)

    try:
        weekly_target = WeeklyTarget.objects.select_for_update().get(id=weekly_target_id)
    except WeeklyTarget.DoesNotExist:
        raise InvalidReferenceError(f"Weekly target with ID {weekly_target_id} does not exist")

    if not weekly_target.covers(date):
        raise InvalidDateRangeError(
            f"{date} is outside weekly target {weekly_target_id} "
            f"({weekly_target.start_date}..{weekly_target.end_date})"
        )

    check_allocation_total(weekly_target.daily_targets.all(), allocation_percentage)

    try:
        with transaction.atomic():
            target = DailyTarget.objects.create(
                weekly_target=weekly_target,
                date=date,
                allocation_percentage=allocation_percentage,
                target_sales_amount=target_sales_amount,
                target_customer_count=target_customer_count,
                target_total_items_sold=target_total_items_sold,
            )
    except IntegrityError:
        raise DuplicateTargetError(duplicate_message)

    logger.info("Created daily target %s (weekly_target=%s date=%s)", target.id, weekly_target_id, date)
    return target


@transaction.atomic
def delete_daily_target(*, target_id: int) -> None:
    """
    Delete a daily target.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    deleted, _ = DailyTarget.objects.filter(id=target_id).delete()
    if not deleted:
        raise TargetNotFoundError(f"Daily target with ID {target_id} not found")

    logger.info("Deleted daily target %s", target_id)

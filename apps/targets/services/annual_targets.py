"""
Annual target management service.

Annual targets are the root of the allocation tree: one per (year, store).
Deleting one removes its monthly, weekly and daily targets in the same
transaction, children first.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction, IntegrityError

from apps.stores.models import Store
from apps.targets.models import AnnualTarget, MonthlyTarget, WeeklyTarget, DailyTarget

from .allocation import AMOUNT_FIELDS, apply_fields
from .exceptions import (
    DuplicateTargetError,
    InvalidReferenceError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)

ANNUAL_UPDATABLE_FIELDS = ('year', 'store_id') + AMOUNT_FIELDS


def _annual_targets_with_tree():
    return (
        AnnualTarget.objects
        .select_related('store')
        .prefetch_related('monthly_targets__weekly_targets__daily_targets')
    )


def _duplicate_message(year: int, store_id: int) -> str:
    return f"Annual target for store {store_id} in {year} already exists"


def list_annual_targets(*, store_id: Optional[int] = None, year: Optional[int] = None):
    """
    List annual targets with the whole allocation tree loaded.

    Args:
        store_id: Only targets of this store (optional)
        year: Only targets of this year (optional)

    Returns:
        QuerySet ordered by year (newest first), then store ID
    """
    queryset = _annual_targets_with_tree()

    if store_id is not None:
        queryset = queryset.filter(store_id=store_id)
    if year is not None:
        queryset = queryset.filter(year=year)

    return queryset.order_by('-year', 'store_id')


def get_annual_target(*, target_id: int) -> AnnualTarget:
    """
    Get an annual target with store and children joined.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    try:
        return _annual_targets_with_tree().get(id=target_id)
    except AnnualTarget.DoesNotExist:
        raise TargetNotFoundError(f"Annual target with ID {target_id} not found")


@transaction.atomic
def create_annual_target(
    *,
    year: int,
    store_id: int,
    target_sales_amount: Decimal,
    target_customer_count: int,
    target_total_items_sold: Optional[int] = None
) -> AnnualTarget:
    """
    Create the annual target of a store.

    Args:
        year: Target year
        store_id: Store the target belongs to
        target_sales_amount: Yearly sales goal
        target_customer_count: Yearly customer goal
        target_total_items_sold: Yearly items-sold goal (optional)

    Returns:
        Created AnnualTarget with store joined

    Raises:
        DuplicateTargetError: If the store already has a target for the year
        InvalidReferenceError: If the store doesn't exist
    """
    if AnnualTarget.objects.filter(year=year, store_id=store_id).exists():
        logger.warning("Rejected duplicate annual target year=%s store=%s", year, store_id)
        raise DuplicateTargetError(_duplicate_message(year, store_id))

    if not Store.objects.filter(id=store_id).exists():
        raise InvalidReferenceError(f"Store with ID {store_id} does not exist")

    try:
        # Unique pair can still collide with a concurrent insert
        with transaction.atomic():
            target = AnnualTarget.objects.create(
                year=year,
                store_id=store_id,
                target_sales_amount=target_sales_amount,
                target_customer_count=target_customer_count,
                target_total_items_sold=target_total_items_sold,
            )
    except IntegrityError:
        raise DuplicateTargetError(_duplicate_message(year, store_id))

    logger.info("Created annual target %s (year=%s store=%s)", target.id, year, store_id)
    return get_annual_target(target_id=target.id)


@transaction.atomic
def update_annual_target(*, target_id: int, **fields) -> AnnualTarget:
    """
    Overwrite the provided fields of an annual target.

    Args:
        target_id: ID of the annual target
        **fields: Any of year, store_id, target_sales_amount,
            target_customer_count, target_total_items_sold

    Returns:
        Updated AnnualTarget with store and children joined

    Raises:
        TargetNotFoundError: If target doesn't exist
        InvalidReferenceError: If a new store_id doesn't exist
        DuplicateTargetError: If the new (year, store) pair is taken
    """
    try:
        target = AnnualTarget.objects.select_for_update().get(id=target_id)
    except AnnualTarget.DoesNotExist:
        raise TargetNotFoundError(f"Annual target with ID {target_id} not found")

    year = fields.get('year', target.year)
    store_id = fields.get('store_id', target.store_id)

    if (year, store_id) != (target.year, target.store_id):
        if store_id != target.store_id and not Store.objects.filter(id=store_id).exists():
            raise InvalidReferenceError(f"Store with ID {store_id} does not exist")

        taken = (
            AnnualTarget.objects
            .filter(year=year, store_id=store_id)
            .exclude(id=target.id)
            .exists()
        )
        if taken:
            raise DuplicateTargetError(_duplicate_message(year, store_id))

    update_fields = apply_fields(target, fields, ANNUAL_UPDATABLE_FIELDS)

    try:
        with transaction.atomic():
            target.save(update_fields=update_fields)
    except IntegrityError:
        raise DuplicateTargetError(_duplicate_message(year, store_id))

    logger.info("Updated annual target %s fields=%s", target.id, update_fields[1:])
    return get_annual_target(target_id=target.id)


@transaction.atomic
def delete_annual_target(*, target_id: int) -> None:
    """
    Delete an annual target and its whole allocation tree.

    Children are removed bottom-up (daily, weekly, monthly) before the
    annual target itself, all inside one transaction.

    Raises:
        TargetNotFoundError: If target doesn't exist
    """
    try:
        target = AnnualTarget.objects.select_for_update().get(id=target_id)
    except AnnualTarget.DoesNotExist:
        raise TargetNotFoundError(f"Annual target with ID {target_id} not found")

    daily_count, _ = DailyTarget.objects.filter(
        weekly_target__monthly_target__annual_target_id=target.id
    ).delete()
    weekly_count, _ = WeeklyTarget.objects.filter(
        monthly_target__annual_target_id=target.id
    ).delete()
    monthly_count, _ = MonthlyTarget.objects.filter(annual_target_id=target.id).delete()

    target.delete()

    logger.info(
        "Deleted annual target %s with %s monthly, %s weekly, %s daily targets",
        target_id, monthly_count, weekly_count, daily_count,
    )

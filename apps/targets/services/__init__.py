"""
Targets app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions; parents are locked with
select_for_update while their children are written.
"""

from .exceptions import (
    TargetsServiceError,
    TargetNotFoundError,
    DuplicateTargetError,
    InvalidReferenceError,
    AllocationExceededError,
    InvalidDateRangeError,
)

from .allocation import (
    allocated_total,
    check_allocation_total,
)

from .annual_targets import (
    list_annual_targets,
    get_annual_target,
    create_annual_target,
    update_annual_target,
    delete_annual_target,
)

from .monthly_targets import (
    list_monthly_targets,
    get_monthly_target,
    create_monthly_target,
    update_monthly_target,
    delete_monthly_target,
)

from .weekly_targets import (
    list_weekly_targets,
    get_weekly_target,
    create_weekly_target,
    delete_weekly_target,
)

from .daily_targets import (
    list_daily_targets,
    get_daily_target,
    create_daily_target,
    delete_daily_target,
)


__all__ = [
    # Exceptions
    'TargetsServiceError',
    'TargetNotFoundError',
    'DuplicateTargetError',
    'InvalidReferenceError',
    'AllocationExceededError',
    'InvalidDateRangeError',

    # Allocation
    'allocated_total',
    'check_allocation_total',

    # Annual Targets
    'list_annual_targets',
    'get_annual_target',
    'create_annual_target',
    'update_annual_target',
    'delete_annual_target',

    # Monthly Targets
    'list_monthly_targets',
    'get_monthly_target',
    'create_monthly_target',
    'update_monthly_target',
    'delete_monthly_target',

    # Weekly Targets
    'list_weekly_targets',
    'get_weekly_target',
    'create_weekly_target',
    'delete_weekly_target',

    # Daily Targets
    'list_daily_targets',
    'get_daily_target',
    'create_daily_target',
    'delete_daily_target',
]

"""
Domain-specific exceptions for targets app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class TargetsServiceError(Exception):
    """Base exception for all targets service errors."""
    pass


class TargetNotFoundError(TargetsServiceError):
    """Raised when a target addressed by ID does not exist."""
    pass


class DuplicateTargetError(TargetsServiceError):
    """Raised when a target already exists for the same parent and period."""
    pass


class InvalidReferenceError(TargetsServiceError):
    """Raised when the store or parent target referenced in input does not exist."""
    pass


class AllocationExceededError(TargetsServiceError):
    """Raised when the children of one parent would be allocated more than 100%."""
    pass


class InvalidDateRangeError(TargetsServiceError):
    """Raised when a weekly range is inverted or a day falls outside its week."""
    pass

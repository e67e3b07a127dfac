"""
Domain-specific exceptions for sales app.

Unknown stores raise StoreNotFoundError from the stores app.
"""


class SalesServiceError(Exception):
    """Base exception for all sales service errors."""
    pass


class InvalidCsvError(SalesServiceError):
    """Raised when an uploaded file cannot be read as a sales export."""
    pass


class InvalidCsvRowError(SalesServiceError):
    """Raised for a single unusable row; collected, never propagated out of the import."""
    pass


class DuplicateCategoryError(SalesServiceError):
    """Raised when a category code is already used."""
    pass


class InvalidCategoryError(SalesServiceError):
    """Raised when a category's parent or level doesn't fit the two-level tree."""
    pass

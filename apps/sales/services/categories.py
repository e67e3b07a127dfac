"""
Category management service.

Categories form a two-level tree. Level-1 categories are roots and
level-2 categories point at a level-1 parent. The POS identifies
categories by code, so every write is keyed on the code.
"""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.db.models import Prefetch

from ..models import Category, ProductStatus
from .exceptions import DuplicateCategoryError, InvalidCategoryError, InvalidCsvRowError

logger = logging.getLogger(__name__)


def list_categories():
    """
    List active categories ordered by level, then code.

    Returns:
        QuerySet of Category with parent joined and active children prefetched
    """
    active_children = Category.objects.filter(status=ProductStatus.ACTIVE).order_by('code')
    return (
        Category.objects
        .filter(status=ProductStatus.ACTIVE)
        .select_related('parent')
        .prefetch_related(Prefetch('children', queryset=active_children))
        .order_by('level', 'code')
    )


def _resolve_parent(level: int, parent_id: Optional[int]) -> Optional[Category]:
    if parent_id is None:
        return None
    if level == 1:
        raise InvalidCategoryError("Level 1 categories cannot have a parent")
    try:
        parent = Category.objects.get(id=parent_id)
    except Category.DoesNotExist:
        raise InvalidCategoryError(f"Parent category with ID {parent_id} does not exist")
    if parent.level != level - 1:
        raise InvalidCategoryError(
            f"Parent category {parent.code} is level {parent.level}, expected level {level - 1}"
        )
    return parent


@transaction.atomic
def create_category(
    *,
    code: str,
    name: str,
    level: int = 1,
    parent_id: Optional[int] = None
) -> Category:
    """
    Create an active category.

    Args:
        code: POS category code, unique across levels
        name: Display name
        level: 1 for a root, 2 for a sub-category
        parent_id: Level-1 parent of a level-2 category (optional)

    Returns:
        Created Category

    Raises:
        DuplicateCategoryError: If the code is already used
        InvalidCategoryError: If the parent is missing or on the wrong level
    """
    if Category.objects.filter(code=code).exists():
        raise DuplicateCategoryError(f"Category code {code} is already used")

    parent = _resolve_parent(level, parent_id)

    try:
        with transaction.atomic():
            category = Category.objects.create(
                code=code,
                name=name,
                level=level,
                parent=parent,
                status=ProductStatus.ACTIVE,
            )
    except IntegrityError:
        raise DuplicateCategoryError(f"Category code {code} is already used")

    logger.info("Created category %s (%s) level=%s parent=%s", category.code, name, level, parent_id)
    return category


def upsert_category(
    *,
    code: str,
    name: str,
    level: int,
    parent: Optional[Category] = None
) -> Category:
    """
    Find a category by code or create it from an import row.

    An existing category keeps its name and parent.

    Raises:
        InvalidCsvRowError: If the name is empty or the code belongs to another level
    """
    category = Category.objects.filter(code=code).first()

    if category is None:
        if not name:
            raise InvalidCsvRowError(f"Category {code} has no name")
        category = Category.objects.create(
            code=code,
            name=name,
            level=level,
            parent=parent,
            status=ProductStatus.ACTIVE,
        )
        logger.info("Created category %s (%s) from CSV", code, name)
    elif category.level != level:
        raise InvalidCsvRowError(f"Category code {code} is a level {category.level} category")

    return category

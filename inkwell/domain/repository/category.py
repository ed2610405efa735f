"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from inkwell.domain.model import Category
from inkwell.domain.value import (
    CategoryCounts,
    CategoryId,
    Page,
    PageRequest,
    Slug,
    SortOrderEntry,
)


class CategoryRepository(ABC):
    """Repository for Category entity.

    Returned categories carry ``posts_count``, the number of published
    posts filed under them.
    """

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID.

        Args:
            category_id: The category's unique identifier

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, category_ids: Sequence[CategoryId]) -> List[Category]:
        """Find categories by ID.

        Args:
            category_ids: Category IDs to look up

        Returns:
            The categories that exist
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug, active or not.

        Args:
            slug: The category slug

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self, page: PageRequest, is_active: Optional[bool] = None
    ) -> Page[Category]:
        """List categories one page at a time.

        Args:
            page: Page number, size and ordering
            is_active: Restrict to active (True) or inactive (False) categories

        Returns:
            Page of categories with pagination metadata
        """
        pass

    @abstractmethod
    async def find_active(self) -> List[Category]:
        """All active categories ordered by sort order, then name."""
        pass

    @abstractmethod
    async def find_popular(self, limit: int) -> List[Category]:
        """Active categories by published post count desc, then sort order asc."""
        pass

    @abstractmethod
    async def find_with_post_count(self) -> List[Category]:
        """All categories with post counts, ordered by sort order."""
        pass

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Save a category (create or update).

        Args:
            category: The category to save

        Returns:
            The saved category

        Raises:
            ConflictError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def delete(self, category_id: CategoryId) -> bool:
        """Remove a category row (hard delete).

        Returns:
            True if a row was removed
        """
        pass

    @abstractmethod
    async def max_sort_order(self) -> int:
        """Highest sort order in use, or 0 when there are no categories."""
        pass

    @abstractmethod
    async def update_sort_order(self, category_id: CategoryId, sort_order: int) -> bool:
        """Set one category's sort order.

        Returns:
            True if the category exists and was updated
        """
        pass

    @abstractmethod
    async def update_sort_orders(self, entries: Sequence[SortOrderEntry]) -> int:
        """Set several categories' sort orders in one unit of work.

        Returns:
            Number of categories updated
        """
        pass

    @abstractmethod
    async def get_category_counts(self) -> CategoryCounts:
        """Count categories by activity flag."""
        pass

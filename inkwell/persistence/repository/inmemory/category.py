"""In-memory category repository for testing."""

from typing import Optional, Sequence

from inkwell.domain.error import ConflictError
from inkwell.domain.model import Category
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import BlogPostRepository, CategoryRepository
from inkwell.domain.value import (
    CategoryCounts,
    CategoryId,
    Page,
    PageRequest,
    Pagination,
    Slug,
    SortOrder,
    SortOrderEntry,
)


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing.

    Post counts come from the blog post repository when one is given.
    The slug uniqueness constraint is enforced on save like the database does.
    """

    def __init__(self, blog_post_repository: BlogPostRepository | None = None) -> None:
        self._categories: dict[CategoryId, Category] = {}
        self._blog_posts = blog_post_repository

    async def _with_count(self, category: Category) -> Category:
        if self._blog_posts is None:
            return category
        count = await self._blog_posts.count_published(category.id)
        return category.model_copy(update={"posts_count": count})

    async def _all_with_counts(self) -> list[Category]:
        return [await self._with_count(c) for c in self._categories.values()]

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        category = self._categories.get(category_id)
        return await self._with_count(category) if category else None

    async def find_by_ids(self, category_ids: Sequence[CategoryId]) -> list[Category]:
        """Find categories by ID."""
        return [
            await self._with_count(self._categories[i])
            for i in category_ids
            if i in self._categories
        ]

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        for category in self._categories.values():
            if category.slug == slug:
                return await self._with_count(category)
        return None

    async def find_all(
        self, page: PageRequest, is_active: Optional[bool] = None
    ) -> Page[Category]:
        """List categories one page at a time."""
        categories = await self._all_with_counts()
        if is_active is not None:
            categories = [c for c in categories if c.is_active == is_active]

        sort_by = page.sort_by or "sort_order"
        categories.sort(
            key=lambda c: getattr(c, sort_by),
            reverse=page.sort_order == SortOrder.DESC,
        )
        return Page[Category](
            data=categories[page.offset : page.offset + page.limit],
            pagination=Pagination.build(page.page, page.limit, len(categories)),
        )

    async def find_active(self) -> list[Category]:
        """All active categories by sort order, then name."""
        categories = [c for c in await self._all_with_counts() if c.is_active]
        return sorted(categories, key=lambda c: (c.sort_order, c.name))

    async def find_popular(self, limit: int) -> list[Category]:
        """Active categories by post count desc, then sort order asc."""
        categories = [c for c in await self._all_with_counts() if c.is_active]
        categories.sort(key=lambda c: (-c.posts_count, c.sort_order))
        return categories[:limit]

    async def find_with_post_count(self) -> list[Category]:
        """All categories with post counts."""
        return sorted(await self._all_with_counts(), key=lambda c: c.sort_order)

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        for other in self._categories.values():
            if other.slug == category.slug and other.id != category.id:
                raise ConflictError("Category", "slug", category.slug.root)
        self._categories[category.id] = category.model_copy(update={"posts_count": 0})
        return await self._with_count(category)

    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category."""
        return self._categories.pop(category_id, None) is not None

    async def max_sort_order(self) -> int:
        """Highest sort order in use."""
        return max((c.sort_order for c in self._categories.values()), default=0)

    async def update_sort_order(self, category_id: CategoryId, sort_order: int) -> bool:
        """Set one category's sort order."""
        category = self._categories.get(category_id)
        if category is None:
            return False
        self._categories[category_id] = category.model_copy(
            update={"sort_order": sort_order, "updated_at": utcnow()}
        )
        return True

    async def update_sort_orders(self, entries: Sequence[SortOrderEntry]) -> int:
        """Set several categories' sort orders."""
        updated = 0
        for entry in entries:
            if await self.update_sort_order(entry.category_id, entry.sort_order):
                updated += 1
        return updated

    async def get_category_counts(self) -> CategoryCounts:
        """Count categories by activity flag."""
        active = sum(1 for c in self._categories.values() if c.is_active)
        return CategoryCounts(
            total=len(self._categories),
            active=active,
            inactive=len(self._categories) - active,
        )

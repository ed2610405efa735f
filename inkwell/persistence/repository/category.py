"""PostgreSQL implementation of Category repository."""

from typing import List, Optional, Sequence

from sqlalchemy import asc, desc, func, select, update

from inkwell.domain.error import ConflictError
from inkwell.domain.model import Category
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import CategoryRepository
from inkwell.domain.value import (
    CategoryCounts,
    CategoryId,
    Page,
    PageRequest,
    Pagination,
    PostStatus,
    Slug,
    SortOrder,
    SortOrderEntry,
)
from inkwell.persistence.mappers import category_to_dict, row_to_category
from inkwell.persistence.repository.base import PostgresRepository
from inkwell.persistence.tables import blog_posts_table, categories_table

# Published posts per category, correlated to the outer categories row
_posts_count = (
    select(func.count())
    .select_from(blog_posts_table)
    .where(blog_posts_table.c.category_id == categories_table.c.id)
    .where(blog_posts_table.c.is_published.is_(True))
    .where(blog_posts_table.c.status == PostStatus.PUBLISHED.value)
    .scalar_subquery()
    .label("posts_count")
)


class PostgresCategoryRepository(PostgresRepository, CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    @staticmethod
    def _select():
        return select(categories_table, _posts_count)

    async def _fetch_all(self, stmt) -> List[Category]:
        result = await self.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        stmt = self._select().where(categories_table.c.id == category_id)
        row = (await self.execute(stmt)).fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_ids(self, category_ids: Sequence[CategoryId]) -> List[Category]:
        """Find categories by ID."""
        if not category_ids:
            return []
        stmt = self._select().where(categories_table.c.id.in_(list(category_ids)))
        return await self._fetch_all(stmt)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        stmt = self._select().where(categories_table.c.slug == slug.root)
        row = (await self.execute(stmt)).fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_all(
        self, page: PageRequest, is_active: Optional[bool] = None
    ) -> Page[Category]:
        """List categories one page at a time."""
        conditions = []
        if is_active is not None:
            conditions.append(categories_table.c.is_active.is_(is_active))

        count_stmt = (
            select(func.count()).select_from(categories_table).where(*conditions)
        )
        total = (await self.execute(count_stmt)).scalar() or 0

        column = categories_table.c[page.sort_by or "sort_order"]
        direction = desc if page.sort_order == SortOrder.DESC else asc
        stmt = (
            self._select()
            .where(*conditions)
            .order_by(direction(column), asc(categories_table.c.name))
            .limit(page.limit)
            .offset(page.offset)
        )
        return Page[Category](
            data=await self._fetch_all(stmt),
            pagination=Pagination.build(page.page, page.limit, total),
        )

    async def find_active(self) -> List[Category]:
        """All active categories by sort order, then name."""
        stmt = (
            self._select()
            .where(categories_table.c.is_active.is_(True))
            .order_by(categories_table.c.sort_order, categories_table.c.name)
        )
        return await self._fetch_all(stmt)

    async def find_popular(self, limit: int) -> List[Category]:
        """Active categories by post count desc, then sort order asc."""
        stmt = (
            self._select()
            .where(categories_table.c.is_active.is_(True))
            .order_by(desc(_posts_count), asc(categories_table.c.sort_order))
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def find_with_post_count(self) -> List[Category]:
        """All categories with post counts."""
        stmt = self._select().order_by(
            categories_table.c.sort_order, categories_table.c.name
        )
        return await self._fetch_all(stmt)

    async def save(self, category: Category) -> Category:
        """Save a category (create or update)."""
        values = category_to_dict(category)
        exists_stmt = select(categories_table.c.id).where(
            categories_table.c.id == category.id
        )
        if (await self.execute(exists_stmt)).fetchone():
            stmt = (
                categories_table.update()
                .where(categories_table.c.id == category.id)
                .values(**values)
            )
        else:
            stmt = categories_table.insert().values(**values)

        await self.execute(
            stmt, conflict=ConflictError("Category", "slug", category.slug.root)
        )
        await self.flush()
        return await self.find_by_id(category.id) or category

    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category (hard delete)."""
        stmt = categories_table.delete().where(categories_table.c.id == category_id)
        result = await self.execute(stmt)
        await self.flush()
        return (result.rowcount or 0) > 0

    async def max_sort_order(self) -> int:
        """Highest sort order in use."""
        stmt = select(func.max(categories_table.c.sort_order))
        return (await self.execute(stmt)).scalar() or 0

    async def update_sort_order(self, category_id: CategoryId, sort_order: int) -> bool:
        """Set one category's sort order."""
        stmt = (
            update(categories_table)
            .where(categories_table.c.id == category_id)
            .values(sort_order=sort_order, updated_at=utcnow())
        )
        result = await self.execute(stmt)
        await self.flush()
        return (result.rowcount or 0) > 0

    async def update_sort_orders(self, entries: Sequence[SortOrderEntry]) -> int:
        """Set several sort orders on the request session (one transaction)."""
        updated = 0
        now = utcnow()
        for entry in entries:
            stmt = (
                update(categories_table)
                .where(categories_table.c.id == entry.category_id)
                .values(sort_order=entry.sort_order, updated_at=now)
            )
            result = await self.execute(stmt)
            updated += result.rowcount or 0
        await self.flush()
        return updated

    async def get_category_counts(self) -> CategoryCounts:
        """Count categories by activity flag."""
        active = categories_table.c.is_active
        stmt = select(
            func.count().label("total"),
            func.count().filter(active.is_(True)).label("active"),
            func.count().filter(active.is_(False)).label("inactive"),
        ).select_from(categories_table)
        row = (await self.execute(stmt)).one()
        return CategoryCounts(**row._asdict())

"""PostgreSQL implementation of BlogPost repository."""

from typing import List, Optional, Sequence

from sqlalchemy import exists as sql_exists, func, select

from inkwell.domain.model import BlogPost
from inkwell.domain.repository import BlogPostRepository
from inkwell.domain.value import BlogPostId, CategoryId, PostStatus
from inkwell.persistence.mappers import blog_post_to_dict, row_to_blog_post
from inkwell.persistence.repository.base import PostgresRepository
from inkwell.persistence.tables import blog_posts_table


class PostgresBlogPostRepository(PostgresRepository, BlogPostRepository):
    """PostgreSQL implementation of BlogPostRepository."""

    async def find_by_id(self, blog_post_id: BlogPostId) -> Optional[BlogPost]:
        """Find a blog post by ID."""
        stmt = select(blog_posts_table).where(blog_posts_table.c.id == blog_post_id)
        result = await self.execute(stmt)
        row = result.fetchone()
        return row_to_blog_post(row._asdict()) if row else None

    async def find_by_ids(self, blog_post_ids: Sequence[BlogPostId]) -> List[BlogPost]:
        """Find blog posts by ID."""
        if not blog_post_ids:
            return []
        stmt = select(blog_posts_table).where(
            blog_posts_table.c.id.in_(list(blog_post_ids))
        )
        result = await self.execute(stmt)
        return [row_to_blog_post(row._asdict()) for row in result.fetchall()]

    async def exists(self, blog_post_id: BlogPostId) -> bool:
        """Check whether a blog post exists."""
        stmt = select(sql_exists().where(blog_posts_table.c.id == blog_post_id))
        result = await self.execute(stmt)
        return bool(result.scalar())

    async def save(self, blog_post: BlogPost) -> BlogPost:
        """Save a blog post (create or update)."""
        values = blog_post_to_dict(blog_post)
        if await self.exists(blog_post.id):
            stmt = (
                blog_posts_table.update()
                .where(blog_posts_table.c.id == blog_post.id)
                .values(**values)
            )
        else:
            stmt = blog_posts_table.insert().values(**values)
        await self.execute(stmt)
        await self.flush()
        return blog_post

    async def count_published(self, category_id: Optional[CategoryId] = None) -> int:
        """Count published posts, optionally within one category."""
        stmt = (
            select(func.count())
            .select_from(blog_posts_table)
            .where(blog_posts_table.c.is_published.is_(True))
            .where(blog_posts_table.c.status == PostStatus.PUBLISHED.value)
        )
        if category_id is not None:
            stmt = stmt.where(blog_posts_table.c.category_id == category_id)
        result = await self.execute(stmt)
        return result.scalar() or 0

    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count all posts in a category."""
        stmt = (
            select(func.count())
            .select_from(blog_posts_table)
            .where(blog_posts_table.c.category_id == category_id)
        )
        result = await self.execute(stmt)
        return result.scalar() or 0

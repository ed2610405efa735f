"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, asc, desc, func, or_, select, update

from inkwell.domain.model import Comment
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import CommentRepository
from inkwell.domain.value import (
    AuthorCommentCount,
    BlogPostId,
    CommentFilter,
    CommentId,
    CommentStats,
    CommentStatus,
    CommentTrendBucket,
    Page,
    PageRequest,
    Pagination,
    PostCommentCount,
    SortOrder,
    UserId,
)
from inkwell.persistence.mappers import comment_to_dict, row_to_comment
from inkwell.persistence.repository.base import PostgresRepository
from inkwell.persistence.tables import blog_posts_table, comments_table

_APPROVED = CommentStatus.APPROVED.value


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    @staticmethod
    def _filter_conditions(filters: CommentFilter) -> list:
        c = comments_table.c
        conditions = [c.is_active.is_(True)]
        if filters.blog_post_id is not None:
            conditions.append(c.blog_post_id == filters.blog_post_id)
        if filters.author_id is not None:
            conditions.append(c.author_id == filters.author_id)
        if filters.status is not None:
            conditions.append(c.status == filters.status.value)
        if filters.top_level_only:
            conditions.append(c.parent_id.is_(None))
        if filters.search:
            conditions.append(c.content.icontains(filters.search, autoescape=True))
        if filters.created_from is not None:
            conditions.append(c.created_at >= filters.created_from)
        if filters.created_to is not None:
            conditions.append(c.created_at <= filters.created_to)
        return conditions

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find comments by ID."""
        if not comment_ids:
            return []
        stmt = select(comments_table).where(comments_table.c.id.in_(list(comment_ids)))
        result = await self.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_all(
        self, filters: CommentFilter, page: PageRequest
    ) -> Page[Comment]:
        """Find active comments matching filters."""
        conditions = self._filter_conditions(filters)

        count_stmt = select(func.count()).select_from(comments_table).where(*conditions)
        total = (await self.execute(count_stmt)).scalar() or 0

        column = comments_table.c[page.sort_by or "created_at"]
        direction = desc if page.sort_order == SortOrder.DESC else asc
        stmt = (
            select(comments_table)
            .where(*conditions)
            .order_by(direction(column), direction(comments_table.c.id))
            .limit(page.limit)
            .offset(page.offset)
        )
        result = await self.execute(stmt)

        return Page[Comment](
            data=[row_to_comment(row._asdict()) for row in result.fetchall()],
            pagination=Pagination.build(page.page, page.limit, total),
        )

    async def find_replies(
        self, parent_ids: Sequence[CommentId], limit_per_parent: int
    ) -> dict[CommentId, List[Comment]]:
        """Find approved active replies per parent, oldest first."""
        if not parent_ids or limit_per_parent <= 0:
            return {}

        c = comments_table.c
        ranked = (
            select(
                comments_table,
                func.row_number()
                .over(partition_by=c.parent_id, order_by=c.created_at)
                .label("position"),
            )
            .where(c.parent_id.in_(list(parent_ids)))
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
            .subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.position <= limit_per_parent)
            .order_by(ranked.c.parent_id, ranked.c.created_at)
        )
        result = await self.execute(stmt)

        replies: dict[CommentId, List[Comment]] = {}
        for row in result.fetchall():
            reply = row_to_comment(row._asdict())
            replies.setdefault(reply.parent_id, []).append(reply)
        return replies

    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count approved active replies per parent."""
        if not parent_ids:
            return {}
        c = comments_table.c
        stmt = (
            select(c.parent_id, func.count(c.id))
            .where(c.parent_id.in_(list(parent_ids)))
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
            .group_by(c.parent_id)
        )
        result = await self.execute(stmt)
        return {CommentId(row[0]): row[1] for row in result.fetchall()}

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        values = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)
        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**values)
            )
        else:
            stmt = comments_table.insert().values(**values)
        await self.execute(stmt)
        await self.flush()
        return comment

    async def set_status(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Move active comments to a status in one UPDATE."""
        if not comment_ids:
            return 0
        c = comments_table.c
        stmt = (
            update(comments_table)
            .where(c.id.in_(list(comment_ids)))
            .where(c.is_active.is_(True))
            .where(c.status != status.value)
            .values(status=status.value, updated_at=utcnow())
        )
        result = await self.execute(stmt)
        await self.flush()
        return result.rowcount or 0

    async def deactivate(self, comment_ids: Sequence[CommentId]) -> int:
        """Soft-delete active comments."""
        if not comment_ids:
            return 0
        c = comments_table.c
        stmt = (
            update(comments_table)
            .where(c.id.in_(list(comment_ids)))
            .where(c.is_active.is_(True))
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.execute(stmt)
        await self.flush()
        return result.rowcount or 0

    async def deactivate_replies(self, parent_id: CommentId) -> int:
        """Soft-delete direct replies of a comment."""
        c = comments_table.c
        stmt = (
            update(comments_table)
            .where(c.parent_id == parent_id)
            .where(c.is_active.is_(True))
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.execute(stmt)
        await self.flush()
        return result.rowcount or 0

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete)."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        result = await self.execute(stmt)
        await self.flush()
        return (result.rowcount or 0) > 0

    async def get_comment_stats(self) -> CommentStats:
        """Count comments by status in one pass."""
        c = comments_table.c
        active = c.is_active.is_(True)
        stmt = select(
            func.count().filter(active).label("total"),
            func.count().filter(and_(active, c.status == "pending")).label("pending"),
            func.count().filter(and_(active, c.status == "approved")).label("approved"),
            func.count().filter(and_(active, c.status == "rejected")).label("rejected"),
            func.count().filter(c.is_active.is_(False)).label("inactive"),
            func.count()
            .filter(and_(active, c.parent_id.is_not(None)))
            .label("total_replies"),
        ).select_from(comments_table)
        row = (await self.execute(stmt)).one()
        return CommentStats(**row._asdict())

    async def count_approved(self, replies: Optional[bool] = None) -> int:
        """Count approved active comments."""
        c = comments_table.c
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
        )
        if replies is True:
            stmt = stmt.where(c.parent_id.is_not(None))
        elif replies is False:
            stmt = stmt.where(c.parent_id.is_(None))
        return (await self.execute(stmt)).scalar() or 0

    async def count_by_blog_post(self, blog_post_id: BlogPostId) -> int:
        """Count approved active comments of a blog post."""
        c = comments_table.c
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(c.blog_post_id == blog_post_id)
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
        )
        return (await self.execute(stmt)).scalar() or 0

    async def find_recent(self, limit: int) -> List[Comment]:
        """Find newest approved active comments."""
        c = comments_table.c
        stmt = (
            select(comments_table)
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
            .order_by(desc(c.created_at))
            .limit(limit)
        )
        result = await self.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_in_range(
        self, start: datetime, end: datetime, limit: int
    ) -> List[Comment]:
        """Find active comments created within [start, end]."""
        c = comments_table.c
        stmt = (
            select(comments_table)
            .where(c.is_active.is_(True))
            .where(c.created_at >= start)
            .where(c.created_at <= end)
            .order_by(desc(c.created_at))
            .limit(limit)
        )
        result = await self.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def top_commented_posts(self, limit: int) -> List[PostCommentCount]:
        """Blog posts ranked by approved comment count."""
        c = comments_table.c
        count = func.count(c.id).label("comment_count")
        stmt = (
            select(c.blog_post_id, count)
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
            .group_by(c.blog_post_id)
            .order_by(desc(count))
            .limit(limit)
        )
        result = await self.execute(stmt)
        return [
            PostCommentCount(
                blog_post_id=BlogPostId(row.blog_post_id),
                comment_count=row.comment_count,
            )
            for row in result.fetchall()
        ]

    async def most_active_commenters(self, limit: int) -> List[AuthorCommentCount]:
        """Authors ranked by approved comment count."""
        c = comments_table.c
        count = func.count(c.id).label("comment_count")
        stmt = (
            select(c.author_id, count)
            .where(c.is_active.is_(True))
            .where(c.status == _APPROVED)
            .group_by(c.author_id)
            .order_by(desc(count))
            .limit(limit)
        )
        result = await self.execute(stmt)
        return [
            AuthorCommentCount(
                author_id=UserId(row.author_id), comment_count=row.comment_count
            )
            for row in result.fetchall()
        ]

    async def trends(self, since: datetime) -> List[CommentTrendBucket]:
        """Comment counts per creation day and status."""
        c = comments_table.c
        day = func.date(c.created_at).label("day")
        stmt = (
            select(day, c.status, func.count().label("count"))
            .where(c.is_active.is_(True))
            .where(c.created_at >= since)
            .group_by(day, c.status)
            .order_by(desc(day), desc(c.status))
        )
        result = await self.execute(stmt)
        return [
            CommentTrendBucket(
                day=row.day, status=CommentStatus(row.status), count=row.count
            )
            for row in result.fetchall()
        ]

    async def deactivate_rejected_before(self, cutoff: datetime) -> int:
        """Soft-delete rejected comments updated before cutoff."""
        c = comments_table.c
        stmt = (
            update(comments_table)
            .where(c.status == CommentStatus.REJECTED.value)
            .where(c.updated_at < cutoff)
            .where(c.is_active.is_(True))
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.execute(stmt)
        await self.flush()
        return result.rowcount or 0

    async def find_orphaned(self) -> List[Comment]:
        """Find active comments whose parent or blog post is gone."""
        c = comments_table.c
        parents = comments_table.alias("parents")
        stmt = (
            select(comments_table)
            .select_from(
                comments_table.outerjoin(parents, parents.c.id == c.parent_id).outerjoin(
                    blog_posts_table, blog_posts_table.c.id == c.blog_post_id
                )
            )
            .where(c.is_active.is_(True))
            .where(
                or_(
                    and_(c.parent_id.is_not(None), parents.c.id.is_(None)),
                    blog_posts_table.c.id.is_(None),
                )
            )
            .order_by(c.created_at)
        )
        result = await self.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

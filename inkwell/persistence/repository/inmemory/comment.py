"""In-memory comment repository for testing."""

from collections import Counter, defaultdict
from datetime import datetime
from typing import Optional, Sequence

from inkwell.domain.model import Comment
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import BlogPostRepository, CommentRepository
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
)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Takes the blog post repository so orphan detection can see which
    posts exist.
    """

    def __init__(self, blog_post_repository: BlogPostRepository | None = None) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._blog_posts = blog_post_repository

    def _active(self) -> list[Comment]:
        return [c for c in self._comments.values() if c.is_active]

    def _approved(self) -> list[Comment]:
        return [c for c in self._active() if c.status == CommentStatus.APPROVED]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find comments by ID."""
        return [self._comments[i] for i in comment_ids if i in self._comments]

    async def find_all(
        self, filters: CommentFilter, page: PageRequest
    ) -> Page[Comment]:
        """Find active comments matching filters."""
        comments = self._active()

        if filters.blog_post_id is not None:
            comments = [c for c in comments if c.blog_post_id == filters.blog_post_id]
        if filters.author_id is not None:
            comments = [c for c in comments if c.author_id == filters.author_id]
        if filters.status is not None:
            comments = [c for c in comments if c.status == filters.status]
        if filters.top_level_only:
            comments = [c for c in comments if c.parent_id is None]
        if filters.search:
            needle = filters.search.lower()
            comments = [c for c in comments if needle in c.content.lower()]
        if filters.created_from is not None:
            comments = [c for c in comments if c.created_at >= filters.created_from]
        if filters.created_to is not None:
            comments = [c for c in comments if c.created_at <= filters.created_to]

        sort_by = page.sort_by or "created_at"
        comments.sort(
            key=lambda c: getattr(c, sort_by),
            reverse=page.sort_order == SortOrder.DESC,
        )

        return Page[Comment](
            data=comments[page.offset : page.offset + page.limit],
            pagination=Pagination.build(page.page, page.limit, len(comments)),
        )

    async def find_replies(
        self, parent_ids: Sequence[CommentId], limit_per_parent: int
    ) -> dict[CommentId, list[Comment]]:
        """Find approved active replies per parent, oldest first."""
        wanted = set(parent_ids)
        grouped: dict[CommentId, list[Comment]] = defaultdict(list)
        for c in sorted(self._approved(), key=lambda c: c.created_at):
            if c.parent_id in wanted and len(grouped[c.parent_id]) < limit_per_parent:
                grouped[c.parent_id].append(c)
        return dict(grouped)

    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count approved active replies per parent."""
        wanted = set(parent_ids)
        return dict(Counter(c.parent_id for c in self._approved() if c.parent_id in wanted))

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def set_status(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Move active comments to a status."""
        changed = 0
        now = utcnow()
        for comment_id in set(comment_ids):
            comment = self._comments.get(comment_id)
            if comment and comment.is_active and comment.status != status:
                self._comments[comment_id] = comment.model_copy(
                    update={"status": status, "updated_at": now}
                )
                changed += 1
        return changed

    async def deactivate(self, comment_ids: Sequence[CommentId]) -> int:
        """Soft-delete active comments."""
        changed = 0
        now = utcnow()
        for comment_id in set(comment_ids):
            comment = self._comments.get(comment_id)
            if comment and comment.is_active:
                self._comments[comment_id] = comment.model_copy(
                    update={"is_active": False, "updated_at": now}
                )
                changed += 1
        return changed

    async def deactivate_replies(self, parent_id: CommentId) -> int:
        """Soft-delete direct replies of a comment."""
        return await self.deactivate(
            [c.id for c in self._active() if c.parent_id == parent_id]
        )

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment."""
        return self._comments.pop(comment_id, None) is not None

    async def get_comment_stats(self) -> CommentStats:
        """Count comments by status."""
        active = self._active()
        statuses = Counter(c.status for c in active)
        return CommentStats(
            total=len(active),
            pending=statuses[CommentStatus.PENDING],
            approved=statuses[CommentStatus.APPROVED],
            rejected=statuses[CommentStatus.REJECTED],
            inactive=len(self._comments) - len(active),
            total_replies=sum(1 for c in active if c.parent_id is not None),
        )

    async def count_approved(self, replies: Optional[bool] = None) -> int:
        """Count approved active comments."""
        return sum(
            1
            for c in self._approved()
            if replies is None or c.is_reply == replies
        )

    async def count_by_blog_post(self, blog_post_id: BlogPostId) -> int:
        """Count approved active comments of a blog post."""
        return sum(1 for c in self._approved() if c.blog_post_id == blog_post_id)

    async def find_recent(self, limit: int) -> list[Comment]:
        """Find newest approved active comments."""
        return sorted(self._approved(), key=lambda c: c.created_at, reverse=True)[:limit]

    async def find_in_range(
        self, start: datetime, end: datetime, limit: int
    ) -> list[Comment]:
        """Find active comments created within [start, end]."""
        comments = [c for c in self._active() if start <= c.created_at <= end]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[:limit]

    async def top_commented_posts(self, limit: int) -> list[PostCommentCount]:
        """Blog posts ranked by approved comment count."""
        counts = Counter(c.blog_post_id for c in self._approved())
        return [
            PostCommentCount(blog_post_id=post_id, comment_count=count)
            for post_id, count in counts.most_common(limit)
        ]

    async def most_active_commenters(self, limit: int) -> list[AuthorCommentCount]:
        """Authors ranked by approved comment count."""
        counts = Counter(c.author_id for c in self._approved())
        return [
            AuthorCommentCount(author_id=author_id, comment_count=count)
            for author_id, count in counts.most_common(limit)
        ]

    async def trends(self, since: datetime) -> list[CommentTrendBucket]:
        """Comment counts per day and status."""
        counts = Counter(
            (c.created_at.date(), c.status)
            for c in self._active()
            if c.created_at >= since
        )
        buckets = [
            CommentTrendBucket(day=day, status=status, count=count)
            for (day, status), count in counts.items()
        ]
        buckets.sort(key=lambda b: (b.day, b.status.value), reverse=True)
        return buckets

    async def deactivate_rejected_before(self, cutoff: datetime) -> int:
        """Soft-delete rejected comments updated before cutoff."""
        return await self.deactivate(
            [
                c.id
                for c in self._active()
                if c.status == CommentStatus.REJECTED and c.updated_at < cutoff
            ]
        )

    async def find_orphaned(self) -> list[Comment]:
        """Find active comments with a missing parent or blog post."""
        orphans = []
        for c in self._active():
            if c.parent_id is not None and c.parent_id not in self._comments:
                orphans.append(c)
            elif self._blog_posts is not None and not await self._blog_posts.exists(
                c.blog_post_id
            ):
                orphans.append(c)
        return orphans

"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from inkwell.domain.model import Comment
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
    PostCommentCount,
    UserId,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations. Every listing
    and count excludes inactive (soft-deleted) comments unless stated
    otherwise. Implementations do not enforce business rules.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, active or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find comments by ID, active or not.

        Args:
            comment_ids: Comment IDs to look up

        Returns:
            The comments that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_all(
        self, filters: CommentFilter, page: PageRequest
    ) -> Page[Comment]:
        """Find active comments matching filters, one page at a time.

        Args:
            filters: Narrowing filters
            page: Page number, size and ordering

        Returns:
            Page of comments with pagination metadata
        """
        pass

    async def find_by_blog_post(
        self, blog_post_id: BlogPostId, page: PageRequest
    ) -> Page[Comment]:
        """Find approved top-level comments of a blog post."""
        return await self.find_all(
            CommentFilter(
                blog_post_id=blog_post_id,
                status=CommentStatus.APPROVED,
                top_level_only=True,
            ),
            page,
        )

    async def find_by_author(
        self, author_id: UserId, page: PageRequest
    ) -> Page[Comment]:
        """Find comments written by an author, any status."""
        return await self.find_all(CommentFilter(author_id=author_id), page)

    async def find_by_status(
        self, status: CommentStatus, page: PageRequest
    ) -> Page[Comment]:
        """Find comments in one moderation status."""
        return await self.find_all(CommentFilter(status=status), page)

    async def find_pending(self, page: PageRequest) -> Page[Comment]:
        """Find comments awaiting moderation."""
        return await self.find_by_status(CommentStatus.PENDING, page)

    async def search(self, query: str, page: PageRequest) -> Page[Comment]:
        """Find comments whose content contains query, case-insensitively."""
        return await self.find_all(CommentFilter(search=query), page)

    @abstractmethod
    async def find_replies(
        self, parent_ids: Sequence[CommentId], limit_per_parent: int
    ) -> dict[CommentId, List[Comment]]:
        """Find approved active replies for several parents.

        Args:
            parent_ids: Parent comment IDs
            limit_per_parent: Maximum replies returned per parent

        Returns:
            Replies per parent, oldest first. Parents without replies are absent.
        """
        pass

    @abstractmethod
    async def count_replies(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count approved active replies for several parents.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Reply count per parent. Parents without replies are absent.
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def set_status(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> int:
        """Move active comments to a status in a single statement.

        Comments already in the status are left untouched.

        Args:
            comment_ids: Comments to update
            status: Target status

        Returns:
            Number of comments whose status changed
        """
        pass

    @abstractmethod
    async def deactivate(self, comment_ids: Sequence[CommentId]) -> int:
        """Soft-delete active comments.

        Args:
            comment_ids: Comments to deactivate

        Returns:
            Number of comments deactivated
        """
        pass

    @abstractmethod
    async def deactivate_replies(self, parent_id: CommentId) -> int:
        """Soft-delete the direct replies of a comment.

        Args:
            parent_id: Parent comment ID

        Returns:
            Number of replies deactivated
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Remove a comment row (hard delete).

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a row was removed
        """
        pass

    @abstractmethod
    async def get_comment_stats(self) -> CommentStats:
        """Count comments by status, inactive comments and active replies."""
        pass

    @abstractmethod
    async def count_approved(self, replies: Optional[bool] = None) -> int:
        """Count approved active comments.

        Args:
            replies: True for replies only, False for top-level only,
                None for both

        Returns:
            Number of approved active comments
        """
        pass

    @abstractmethod
    async def count_by_blog_post(self, blog_post_id: BlogPostId) -> int:
        """Count approved active comments of a blog post, replies included."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int) -> List[Comment]:
        """Find the newest approved active comments."""
        pass

    @abstractmethod
    async def find_in_range(
        self, start: datetime, end: datetime, limit: int
    ) -> List[Comment]:
        """Find active comments created within [start, end], newest first."""
        pass

    @abstractmethod
    async def top_commented_posts(self, limit: int) -> List[PostCommentCount]:
        """Blog posts ranked by approved active comment count."""
        pass

    @abstractmethod
    async def most_active_commenters(self, limit: int) -> List[AuthorCommentCount]:
        """Authors ranked by approved active comment count."""
        pass

    @abstractmethod
    async def trends(self, since: datetime) -> List[CommentTrendBucket]:
        """Active comment counts per creation day and status, newest day first.

        Args:
            since: Only comments created at or after this instant count
        """
        pass

    @abstractmethod
    async def deactivate_rejected_before(self, cutoff: datetime) -> int:
        """Soft-delete rejected comments last updated before cutoff.

        Returns:
            Number of comments deactivated
        """
        pass

    @abstractmethod
    async def find_orphaned(self) -> List[Comment]:
        """Find active comments whose parent or blog post no longer exists."""
        pass

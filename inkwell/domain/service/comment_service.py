"""Comment domain service."""

from datetime import datetime, timedelta
from typing import Sequence
from uuid import uuid4

import logfire

from inkwell.config import ModerationSettings, PaginationSettings
from inkwell.domain.error import NotFoundError, RepositoryError, ValidationError
from inkwell.domain.model import (
    BulkFailure,
    BulkModerationResult,
    Comment,
    CommentThread,
    SpamCheckedComment,
)
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import BlogPostRepository, CommentRepository
from inkwell.domain.value import (
    AuthorCommentCount,
    BlogPostId,
    CommentEngagementStats,
    CommentId,
    CommentStats,
    CommentStatus,
    CommentTrendBucket,
    Page,
    PageRequest,
    PostCommentCount,
    UserId,
)

from .base import Service
from .spam import SpamDetector, sanitize_content

COMMENT_SORT_FIELDS = frozenset({"created_at", "updated_at", "status"})
MAX_RANKING_LIMIT = 50
MAX_TREND_DAYS = 365


def _ratio(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator, 2)


class CommentService(Service):
    """Domain service for comment moderation and threading.

    The only place comment status transitions happen. Threads are one
    level deep: replies must target an approved top-level comment on the
    same blog post.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        blog_post_repository: BlogPostRepository,
        moderation_settings: ModerationSettings,
        pagination_settings: PaginationSettings,
        spam_detector: SpamDetector,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            blog_post_repository: Blog post repository (existence and counts)
            moderation_settings: Length bounds, batch caps, spam policy
            pagination_settings: Default and maximum page sizes
            spam_detector: Spam scoring policy
        """
        self.comment_repository = comment_repository
        self.blog_post_repository = blog_post_repository
        self.settings = moderation_settings
        self.pagination = pagination_settings
        self.spam_detector = spam_detector

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create(
        self,
        content: str,
        blog_post_id: BlogPostId,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a pending comment or reply.

        Args:
            content: Comment text
            blog_post_id: Blog post being commented on
            author_id: Author user ID
            parent_id: Top-level comment being replied to (None for top-level)

        Returns:
            The created comment, status PENDING

        Raises:
            ValidationError: If content length is out of bounds, the post is
                unpublished, or the parent cannot take replies
            NotFoundError: If the post or parent comment does not exist
        """
        with logfire.span(
            "comment_service.create",
            blog_post_id=str(blog_post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = self._validate_content(content)
            await self._ensure_commentable(blog_post_id, parent_id)

            saved = await self.comment_repository.save(
                self._new_comment(content, blog_post_id, author_id, parent_id)
            )
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                blog_post_id=str(blog_post_id),
                is_reply=saved.is_reply,
            )
            return saved

    async def create_with_spam_detection(
        self,
        content: str,
        blog_post_id: BlogPostId,
        author_id: UserId,
        parent_id: CommentId | None = None,
    ) -> SpamCheckedComment:
        """Create a comment from sanitized content and attach a spam score.

        High scores never reject the comment. They only keep it pending when
        auto-approval is enabled.

        Raises:
            ValidationError: As for ``create``
            NotFoundError: As for ``create``
        """
        with logfire.span(
            "comment_service.create_with_spam_detection",
            blog_post_id=str(blog_post_id),
            author_id=str(author_id),
        ):
            content = self._validate_content(sanitize_content(content))
            assessment = self.spam_detector.assess(content)
            await self._ensure_commentable(blog_post_id, parent_id)

            is_suspect = assessment.score > self.settings.spam_threshold
            auto_approved = self.settings.auto_approve and not is_suspect
            status = CommentStatus.APPROVED if auto_approved else CommentStatus.PENDING

            saved = await self.comment_repository.save(
                self._new_comment(content, blog_post_id, author_id, parent_id, status)
            )

            if is_suspect:
                logfire.warn(
                    "Comment flagged as possible spam",
                    comment_id=str(saved.id),
                    spam_score=assessment.score,
                    signals=assessment.signals,
                )
            logfire.info(
                "Comment created with spam check",
                comment_id=str(saved.id),
                spam_score=assessment.score,
                auto_approved=auto_approved,
            )
            return SpamCheckedComment(
                comment=saved,
                spam_score=assessment.score,
                spam_signals=assessment.signals,
                auto_approved=auto_approved,
            )

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    async def approve(self, comment_id: CommentId) -> Comment:
        """Approve a comment. Approving an approved comment is a no-op.

        Raises:
            NotFoundError: If the comment is missing or inactive
        """
        with logfire.span("comment_service.approve", comment_id=str(comment_id)):
            return await self._transition(comment_id, CommentStatus.APPROVED)

    async def reject(self, comment_id: CommentId) -> Comment:
        """Reject a comment. Rejecting a rejected comment is a no-op.

        Raises:
            NotFoundError: If the comment is missing or inactive
        """
        with logfire.span("comment_service.reject", comment_id=str(comment_id)):
            return await self._transition(comment_id, CommentStatus.REJECTED)

    async def approve_multiple(
        self, comment_ids: Sequence[CommentId]
    ) -> BulkModerationResult:
        """Approve up to ``max_bulk_comments`` comments.

        Missing or inactive ids, and repeats of an id already in the batch,
        are reported in ``failed``; the rest are approved in a single
        statement. Every requested id appears in exactly one of the two lists.

        Raises:
            ValidationError: If the batch is empty or too large
        """
        with logfire.span("comment_service.approve_multiple", count=len(comment_ids)):
            return await self._transition_many(comment_ids, CommentStatus.APPROVED)

    async def reject_multiple(
        self, comment_ids: Sequence[CommentId]
    ) -> BulkModerationResult:
        """Reject up to ``max_bulk_comments`` comments.

        Raises:
            ValidationError: If the batch is empty or too large
        """
        with logfire.span("comment_service.reject_multiple", count=len(comment_ids)):
            return await self._transition_many(comment_ids, CommentStatus.REJECTED)

    async def update(
        self,
        comment_id: CommentId,
        content: str | None = None,
        status: CommentStatus | None = None,
    ) -> Comment:
        """Edit content and/or moderate a comment.

        Content can only change while the comment is pending. Status can
        move between approved and rejected but never back to pending.

        Raises:
            NotFoundError: If the comment is missing or inactive
            ValidationError: If the edit breaks a content or status rule
        """
        with logfire.span(
            "comment_service.update",
            comment_id=str(comment_id),
            has_content=content is not None,
            status=status.value if status else None,
        ):
            comment = await self._get_active(comment_id)
            if content is None and status is None:
                raise ValidationError("Nothing to update")

            changes: dict = {}
            if content is not None:
                if not comment.can_be_edited:
                    raise ValidationError("Only pending comments can be edited")
                changes["content"] = self._validate_content(content)

            if status is not None and status != comment.status:
                if status == CommentStatus.PENDING:
                    raise ValidationError("Comments cannot be moved back to pending")
                if not comment.is_pending:
                    logfire.warn(
                        "Moderation override",
                        comment_id=str(comment_id),
                        from_status=comment.status.value,
                        to_status=status.value,
                    )
                changes["status"] = status

            if not changes:
                return comment

            changes["updated_at"] = utcnow()
            saved = await self.comment_repository.save(comment.model_copy(update=changes))
            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                fields=sorted(changes),
            )
            return saved

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete(self, comment_id: CommentId) -> bool:
        """Soft-delete a comment.

        Returns:
            True if deactivated, False if the datastore failed

        Raises:
            NotFoundError: If the comment is missing or already inactive
        """
        with logfire.span("comment_service.delete", comment_id=str(comment_id)):
            try:
                comment = await self.comment_repository.find_by_id(comment_id)
            except RepositoryError as e:
                logfire.error(
                    "Comment lookup failed", comment_id=str(comment_id), error=str(e)
                )
                return False

            if comment is None or not comment.is_active:
                raise NotFoundError("Comment", str(comment_id))

            try:
                deactivated = await self.comment_repository.deactivate([comment_id])
            except RepositoryError as e:
                logfire.error(
                    "Comment soft delete failed",
                    comment_id=str(comment_id),
                    error=str(e),
                )
                return False

            logfire.info("Comment soft-deleted", comment_id=str(comment_id))
            return deactivated > 0

    async def hard_delete(self, comment_id: CommentId) -> bool:
        """Remove a comment row after deactivating its direct replies.

        Returns:
            True if the row was removed, False if the datastore failed

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.hard_delete", comment_id=str(comment_id)):
            try:
                comment = await self.comment_repository.find_by_id(comment_id)
            except RepositoryError as e:
                logfire.error(
                    "Comment lookup failed", comment_id=str(comment_id), error=str(e)
                )
                return False

            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            try:
                replies = await self.comment_repository.deactivate_replies(comment_id)
                removed = await self.comment_repository.delete(comment_id)
            except RepositoryError as e:
                logfire.error(
                    "Comment hard delete failed",
                    comment_id=str(comment_id),
                    error=str(e),
                )
                return False

            logfire.info(
                "Comment hard-deleted",
                comment_id=str(comment_id),
                replies_deactivated=replies,
            )
            return removed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get an active comment by ID.

        Returns:
            Comment if found and active, None otherwise (also on datastore failure)
        """
        with logfire.span("comment_service.get_by_id", comment_id=str(comment_id)):
            try:
                comment = await self.comment_repository.find_by_id(comment_id)
            except RepositoryError as e:
                logfire.error(
                    "Comment lookup failed", comment_id=str(comment_id), error=str(e)
                )
                return None

            if comment is None or not comment.is_active:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                return None
            return comment

    async def get_by_blog_post(
        self, blog_post_id: BlogPostId, page: PageRequest | None = None
    ) -> Page[CommentThread]:
        """Get approved top-level comments of a post with their first replies.

        Raises:
            NotFoundError: If the blog post does not exist
            ValidationError: If the page request is invalid
        """
        with logfire.span(
            "comment_service.get_by_blog_post", blog_post_id=str(blog_post_id)
        ):
            page = self._page_request(page)
            if not await self.blog_post_repository.exists(blog_post_id):
                raise NotFoundError("BlogPost", str(blog_post_id))

            comments = await self.comment_repository.find_by_blog_post(
                blog_post_id, page
            )
            parent_ids = [c.id for c in comments.data]
            replies = await self.comment_repository.find_replies(
                parent_ids, self.settings.max_replies_per_thread
            )
            counts = await self.comment_repository.count_replies(parent_ids)

            threads = [
                CommentThread(
                    comment=c,
                    replies=replies.get(c.id, []),
                    replies_count=counts.get(c.id, 0),
                )
                for c in comments.data
            ]
            logfire.info(
                "Comment threads retrieved",
                blog_post_id=str(blog_post_id),
                count=len(threads),
                total=comments.pagination.total,
            )
            return Page[CommentThread](data=threads, pagination=comments.pagination)

    async def get_by_author(
        self, author_id: UserId, page: PageRequest | None = None
    ) -> Page[Comment]:
        """Get an author's active comments, any status."""
        with logfire.span("comment_service.get_by_author", author_id=str(author_id)):
            return await self.comment_repository.find_by_author(
                author_id, self._page_request(page)
            )

    async def get_pending(self, page: PageRequest | None = None) -> Page[Comment]:
        """Get comments awaiting moderation."""
        with logfire.span("comment_service.get_pending"):
            return await self.comment_repository.find_pending(self._page_request(page))

    async def search_comments(
        self, query: str, page: PageRequest | None = None
    ) -> Page[Comment]:
        """Search active comments by content.

        Raises:
            ValidationError: If the query is blank
        """
        with logfire.span("comment_service.search_comments"):
            query = query.strip()
            if not query:
                raise ValidationError("Search query cannot be empty")
            return await self.comment_repository.search(query, self._page_request(page))

    async def get_recent_comments(self, limit: int = 10) -> list[Comment]:
        """Get the newest approved comments."""
        with logfire.span("comment_service.get_recent_comments", limit=limit):
            self._check_limit(limit)
            return await self.comment_repository.find_recent(limit)

    async def get_comments_by_date_range(
        self, start: datetime, end: datetime
    ) -> list[Comment]:
        """Get active comments created in a window, newest first.

        Raises:
            ValidationError: If start is not before end or the window is too wide
        """
        with logfire.span(
            "comment_service.get_comments_by_date_range",
            start=start.isoformat(),
            end=end.isoformat(),
        ):
            if start >= end:
                raise ValidationError("Start date must be before end date")
            if end - start > timedelta(days=self.settings.max_date_range_days):
                raise ValidationError(
                    f"Date range cannot exceed {self.settings.max_date_range_days} days"
                )
            return await self.comment_repository.find_in_range(
                start, end, self.settings.max_date_range_results
            )

    async def count_comments_by_blog_post(self, blog_post_id: BlogPostId) -> int:
        """Count approved comments of a blog post, replies included."""
        with logfire.span(
            "comment_service.count_comments_by_blog_post",
            blog_post_id=str(blog_post_id),
        ):
            return await self.comment_repository.count_by_blog_post(blog_post_id)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def get_comment_stats(self) -> CommentStats:
        """Comment counts by status plus approved comments per published post."""
        with logfire.span("comment_service.get_comment_stats"):
            stats = await self.comment_repository.get_comment_stats()
            published = await self.blog_post_repository.count_published()
            return stats.model_copy(
                update={
                    "average_comments_per_post": _ratio(stats.approved, published)
                }
            )

    async def get_comment_engagement_stats(self) -> CommentEngagementStats:
        """Engagement ratios over approved comments. Zero posts gives zeros."""
        with logfire.span("comment_service.get_comment_engagement_stats"):
            published = await self.blog_post_repository.count_published()
            approved = await self.comment_repository.count_approved()
            replies = await self.comment_repository.count_approved(replies=True)
            top_level = await self.comment_repository.count_approved(replies=False)

            return CommentEngagementStats(
                average_comments_per_post=_ratio(approved, published),
                average_replies_per_comment=_ratio(replies, top_level),
                engagement_rate=_ratio(approved + replies, published),
            )

    async def get_top_commented_posts(self, limit: int = 10) -> list[PostCommentCount]:
        """Posts with the most approved comments, enriched with title and slug.

        Posts that no longer exist are dropped from the ranking.
        """
        with logfire.span("comment_service.get_top_commented_posts", limit=limit):
            self._check_limit(limit)
            ranking = await self.comment_repository.top_commented_posts(limit)
            posts = await self.blog_post_repository.find_by_ids(
                [r.blog_post_id for r in ranking]
            )
            by_id = {p.id: p for p in posts}

            return [
                r.model_copy(
                    update={
                        "title": by_id[r.blog_post_id].title,
                        "slug": by_id[r.blog_post_id].slug,
                    }
                )
                for r in ranking
                if r.blog_post_id in by_id
            ]

    async def get_most_active_commenters(
        self, limit: int = 10
    ) -> list[AuthorCommentCount]:
        """Authors with the most approved comments."""
        with logfire.span("comment_service.get_most_active_commenters", limit=limit):
            self._check_limit(limit)
            return await self.comment_repository.most_active_commenters(limit)

    async def get_comment_trends(self, days: int = 30) -> list[CommentTrendBucket]:
        """Daily comment counts per status over the last ``days`` days."""
        with logfire.span("comment_service.get_comment_trends", days=days):
            if days < 1 or days > MAX_TREND_DAYS:
                raise ValidationError(f"Days must be between 1 and {MAX_TREND_DAYS}")
            return await self.comment_repository.trends(
                utcnow() - timedelta(days=days)
            )

    async def cleanup_old_rejected_comments(self, days_old: int | None = None) -> int:
        """Soft-delete rejected comments not touched for ``days_old`` days.

        Returns:
            Number of comments deactivated
        """
        days = days_old if days_old is not None else self.settings.rejected_retention_days
        with logfire.span(
            "comment_service.cleanup_old_rejected_comments", days_old=days
        ):
            if days < 1:
                raise ValidationError("Days must be at least 1")
            cutoff = utcnow() - timedelta(days=days)
            removed = await self.comment_repository.deactivate_rejected_before(cutoff)
            logfire.info(
                "Old rejected comments cleaned up",
                days_old=days,
                deactivated=removed,
            )
            return removed

    async def get_orphaned_comments(self) -> list[Comment]:
        """Active comments whose parent or blog post no longer exists."""
        with logfire.span("comment_service.get_orphaned_comments"):
            orphans = await self.comment_repository.find_orphaned()
            if orphans:
                logfire.warn("Orphaned comments found", count=len(orphans))
            return orphans

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _new_comment(
        self,
        content: str,
        blog_post_id: BlogPostId,
        author_id: UserId,
        parent_id: CommentId | None,
        status: CommentStatus = CommentStatus.PENDING,
    ) -> Comment:
        now = utcnow()
        return Comment(
            id=CommentId(uuid4()),
            blog_post_id=blog_post_id,
            author_id=author_id,
            content=content,
            parent_id=parent_id,
            status=status,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def _validate_content(self, content: str) -> str:
        """Trim content and check its length bounds."""
        content = content.strip()
        low = self.settings.comment_min_length
        high = self.settings.comment_max_length
        if len(content) < low:
            raise ValidationError(f"Comment must be at least {low} characters")
        if len(content) > high:
            raise ValidationError(f"Comment cannot exceed {high} characters")
        return content

    async def _ensure_commentable(
        self, blog_post_id: BlogPostId, parent_id: CommentId | None
    ) -> None:
        """Check the target post and, for replies, the parent comment."""
        post = await self.blog_post_repository.find_by_id(blog_post_id)
        if post is None:
            raise NotFoundError("BlogPost", str(blog_post_id))
        if not post.is_public:
            raise ValidationError("Cannot comment on unpublished blog posts")

        if parent_id is None:
            return

        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None or not parent.is_active:
            raise NotFoundError("Comment", str(parent_id))
        if parent.blog_post_id != blog_post_id:
            logfire.warn(
                "Cross-post reply attempted",
                parent_id=str(parent_id),
                parent_blog_post_id=str(parent.blog_post_id),
                target_blog_post_id=str(blog_post_id),
            )
            raise NotFoundError("Comment", str(parent_id))
        if parent.is_reply:
            raise ValidationError("Replies can only be nested one level deep")
        if not parent.is_approved:
            raise ValidationError("Cannot reply to a comment that is not approved")

    async def _get_active(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None or not comment.is_active:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _transition(self, comment_id: CommentId, status: CommentStatus) -> Comment:
        comment = await self._get_active(comment_id)
        if comment.status == status:
            logfire.info(
                "Comment already in requested status",
                comment_id=str(comment_id),
                status=status.value,
            )
            return comment

        if not comment.is_pending:
            logfire.warn(
                "Moderation override",
                comment_id=str(comment_id),
                from_status=comment.status.value,
                to_status=status.value,
            )

        saved = await self.comment_repository.save(
            comment.model_copy(update={"status": status, "updated_at": utcnow()})
        )
        logfire.info(
            "Comment moderated", comment_id=str(comment_id), status=status.value
        )
        return saved

    async def _transition_many(
        self, comment_ids: Sequence[CommentId], status: CommentStatus
    ) -> BulkModerationResult:
        if not comment_ids:
            raise ValidationError("At least one comment ID is required")
        if len(comment_ids) > self.settings.max_bulk_comments:
            raise ValidationError(
                f"Cannot process more than {self.settings.max_bulk_comments} comments at once"
            )

        unique_ids = list(dict.fromkeys(comment_ids))
        found = {
            c.id: c for c in await self.comment_repository.find_by_ids(unique_ids)
        }

        failed: list[BulkFailure] = []
        valid: list[CommentId] = []
        seen: set[CommentId] = set()
        for comment_id in comment_ids:
            comment = found.get(comment_id)
            if comment_id in seen:
                failed.append(
                    BulkFailure(id=str(comment_id), reason="Duplicate comment ID")
                )
                continue
            seen.add(comment_id)
            if comment is None:
                failed.append(BulkFailure(id=str(comment_id), reason="Comment not found"))
            elif not comment.is_active:
                failed.append(BulkFailure(id=str(comment_id), reason="Comment is inactive"))
            else:
                valid.append(comment_id)

        changed = 0
        succeeded: list[Comment] = []
        if valid:
            changed = await self.comment_repository.set_status(valid, status)
            updated = {
                c.id: c for c in await self.comment_repository.find_by_ids(valid)
            }
            succeeded = [updated[i] for i in valid if i in updated]

        logfire.info(
            "Bulk moderation applied",
            status=status.value,
            requested=len(comment_ids),
            succeeded=len(succeeded),
            changed=changed,
            failed=len(failed),
        )
        return BulkModerationResult(succeeded=succeeded, failed=failed)

    def _check_limit(self, limit: int) -> None:
        if limit < 1 or limit > MAX_RANKING_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_RANKING_LIMIT}")

    def _page_request(self, page: PageRequest | None) -> PageRequest:
        """Apply comment pagination defaults, caps and sort field rules."""
        if page is None:
            return PageRequest(
                limit=self.pagination.comment_default_limit, sort_by="created_at"
            )
        if page.sort_by is not None and page.sort_by not in COMMENT_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort comments by '{page.sort_by}'; "
                f"allowed: {', '.join(sorted(COMMENT_SORT_FIELDS))}"
            )
        return page.model_copy(
            update={
                "limit": min(page.limit, self.pagination.comment_max_limit),
                "sort_by": page.sort_by or "created_at",
            }
        )

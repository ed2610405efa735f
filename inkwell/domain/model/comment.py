"""Comment entity.

Comments belong to a blog post and may reply to one top-level comment.
Replies are never nested deeper than one level.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel, utcnow
from inkwell.domain.value import BlogPostId, CommentId, CommentStatus, UserId


class Comment(DomainModel):
    """Comment entity.

    ``is_active`` is the soft-delete flag: inactive comments are hidden from
    every listing and count. ``status`` is the moderation axis and is
    independent of it.
    """

    id: CommentId
    blog_post_id: BlogPostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    status: CommentStatus = CommentStatus.PENDING
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def is_approved(self) -> bool:
        return self.status == CommentStatus.APPROVED

    @property
    def is_pending(self) -> bool:
        return self.status == CommentStatus.PENDING

    @property
    def can_be_edited(self) -> bool:
        """Content may only change while the comment awaits moderation."""
        return self.is_active and self.is_pending


class CommentThread(DomainModel):
    """A top-level comment with its first approved replies."""

    comment: Comment
    replies: list[Comment] = []
    replies_count: int = 0


class SpamCheckedComment(DomainModel):
    """A created comment annotated with its spam assessment."""

    comment: Comment
    spam_score: float
    spam_signals: list[str] = []
    auto_approved: bool = False


class BulkFailure(DomainModel):
    """An id a batch operation could not process, with the reason."""

    id: str
    reason: str


class BulkModerationResult(DomainModel):
    """Outcome of a batch approve/reject.

    ``succeeded`` holds every comment now in the target state, including
    those that already were. ``failed`` lists ids that were skipped.
    """

    succeeded: list[Comment] = []
    failed: list[BulkFailure] = []

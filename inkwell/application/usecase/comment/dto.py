"""Comment response DTOs shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from inkwell.domain.model import BulkModerationResult, Comment, CommentThread
from inkwell.domain.value import CommentStatus


class CommentResponse(BaseModel):
    """A single comment."""

    comment_id: str
    blog_post_id: str
    author_id: str
    content: str
    parent_id: str | None
    status: CommentStatus
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=str(comment.id),
            blog_post_id=str(comment.blog_post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            status=comment.status,
            is_active=comment.is_active,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentThreadResponse(CommentResponse):
    """A top-level comment with its first replies."""

    replies: list[CommentResponse]
    replies_count: int

    @classmethod
    def from_thread(cls, thread: CommentThread) -> "CommentThreadResponse":
        base = CommentResponse.from_domain(thread.comment)
        return cls(
            **base.model_dump(),
            replies=[CommentResponse.from_domain(r) for r in thread.replies],
            replies_count=thread.replies_count,
        )


class BulkFailureResponse(BaseModel):
    """An id a batch could not process."""

    id: str
    reason: str


class BulkModerationResponse(BaseModel):
    """Batch moderation outcome. Both lists are always present."""

    succeeded: list[CommentResponse]
    failed: list[BulkFailureResponse]

    @classmethod
    def from_domain(
        cls,
        result: BulkModerationResult,
        extra_failures: list[BulkFailureResponse] | None = None,
    ) -> "BulkModerationResponse":
        return cls(
            succeeded=[CommentResponse.from_domain(c) for c in result.succeeded],
            failed=(extra_failures or [])
            + [BulkFailureResponse(id=f.id, reason=f.reason) for f in result.failed],
        )

"""Read-only aggregate views over comments and categories."""

from datetime import date

from pydantic import Field

from inkwell.domain.value.common import ValueObject
from inkwell.domain.value.identifiers import BlogPostId, CategoryId, UserId
from inkwell.domain.value.types import CommentStatus, Slug


class CommentStats(ValueObject):
    """Comment counts by moderation state.

    All counts except ``inactive`` cover active comments only.
    """

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    inactive: int = 0
    total_replies: int = 0
    average_comments_per_post: float = 0.0


class CommentEngagementStats(ValueObject):
    """Derived engagement ratios, rounded to two decimals."""

    average_comments_per_post: float = 0.0
    average_replies_per_comment: float = 0.0
    engagement_rate: float = 0.0


class PostCommentCount(ValueObject):
    """Approved comment count for one blog post."""

    blog_post_id: BlogPostId
    comment_count: int
    title: str | None = None
    slug: Slug | None = None


class AuthorCommentCount(ValueObject):
    """Approved comment count for one author."""

    author_id: UserId
    comment_count: int


class CommentTrendBucket(ValueObject):
    """Number of comments created on one day with one status."""

    day: date
    status: CommentStatus
    count: int


class CategoryCounts(ValueObject):
    """Category totals by activity flag."""

    total: int = 0
    active: int = 0
    inactive: int = 0


class CategoryPostStats(ValueObject):
    """Per-category post count and availability."""

    category_id: CategoryId
    name: str
    slug: Slug
    posts_count: int
    is_active: bool
    is_available_for_posts: bool


class SortOrderEntry(ValueObject):
    """One item of a bulk category reorder.

    Range checks are done by ``CategoryService.bulk_update_sort_order``.
    """

    category_id: CategoryId
    sort_order: int


class SpamAssessment(ValueObject):
    """Spam score in [0, 1] plus the signals that produced it."""

    score: float = Field(ge=0.0, le=1.0)
    signals: list[str] = []

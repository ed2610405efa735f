"""Domain value objects for Inkwell."""

from inkwell.domain.value.analytics import (
    AuthorCommentCount,
    CategoryCounts,
    CategoryPostStats,
    CommentEngagementStats,
    CommentStats,
    CommentTrendBucket,
    PostCommentCount,
    SortOrderEntry,
    SpamAssessment,
)
from inkwell.domain.value.identifiers import (
    BlogPostId,
    CategoryId,
    CommentId,
    UserId,
)
from inkwell.domain.value.query import CommentFilter, Page, PageRequest, Pagination
from inkwell.domain.value.types import (
    CommentStatus,
    HexColor,
    PostStatus,
    Slug,
    SortOrder,
)

__all__ = [
    # Identifiers
    "BlogPostId",
    "CategoryId",
    "CommentId",
    "UserId",
    # Types
    "CommentStatus",
    "HexColor",
    "PostStatus",
    "Slug",
    "SortOrder",
    # Queries
    "CommentFilter",
    "Page",
    "PageRequest",
    "Pagination",
    # Analytics
    "AuthorCommentCount",
    "CategoryCounts",
    "CategoryPostStats",
    "CommentEngagementStats",
    "CommentStats",
    "CommentTrendBucket",
    "PostCommentCount",
    "SortOrderEntry",
    "SpamAssessment",
]

"""Domain model entities for Inkwell."""

from inkwell.domain.model.blog_post import BlogPost
from inkwell.domain.model.category import Category
from inkwell.domain.model.comment import (
    BulkFailure,
    BulkModerationResult,
    Comment,
    CommentThread,
    SpamCheckedComment,
)

__all__ = [
    "BlogPost",
    "BulkFailure",
    "BulkModerationResult",
    "Category",
    "Comment",
    "CommentThread",
    "SpamCheckedComment",
]

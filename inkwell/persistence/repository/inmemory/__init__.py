"""In-memory repository implementations for testing."""

from .blog_post import InMemoryBlogPostRepository
from .category import InMemoryCategoryRepository
from .comment import InMemoryCommentRepository

__all__ = [
    "InMemoryBlogPostRepository",
    "InMemoryCategoryRepository",
    "InMemoryCommentRepository",
]

"""PostgreSQL repository implementations."""

from inkwell.persistence.repository.blog_post import PostgresBlogPostRepository
from inkwell.persistence.repository.category import PostgresCategoryRepository
from inkwell.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresBlogPostRepository",
    "PostgresCategoryRepository",
    "PostgresCommentRepository",
]

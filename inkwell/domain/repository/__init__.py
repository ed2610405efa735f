"""Repository interfaces for Inkwell domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from inkwell.domain.repository.blog_post import BlogPostRepository
from inkwell.domain.repository.category import CategoryRepository
from inkwell.domain.repository.comment import CommentRepository

__all__ = [
    "BlogPostRepository",
    "CategoryRepository",
    "CommentRepository",
]

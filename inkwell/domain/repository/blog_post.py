"""Blog post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from inkwell.domain.model import BlogPost
from inkwell.domain.value import BlogPostId, CategoryId


class BlogPostRepository(ABC):
    """Repository for BlogPost entity.

    Only the lookups and counts the moderation and category rules need.
    """

    @abstractmethod
    async def find_by_id(self, blog_post_id: BlogPostId) -> Optional[BlogPost]:
        """Find a blog post by ID.

        Args:
            blog_post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, blog_post_ids: Sequence[BlogPostId]) -> List[BlogPost]:
        """Find blog posts by ID.

        Args:
            blog_post_ids: Post IDs to look up

        Returns:
            The posts that exist
        """
        pass

    @abstractmethod
    async def exists(self, blog_post_id: BlogPostId) -> bool:
        """Check whether a blog post exists."""
        pass

    @abstractmethod
    async def save(self, blog_post: BlogPost) -> BlogPost:
        """Save a blog post (create or update)."""
        pass

    @abstractmethod
    async def count_published(self, category_id: Optional[CategoryId] = None) -> int:
        """Count published posts, optionally within one category.

        A post counts when its published flag is set and its status is
        published.
        """
        pass

    @abstractmethod
    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count all posts filed under a category, whatever their status."""
        pass

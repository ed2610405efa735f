"""In-memory blog post repository for testing."""

from typing import Optional, Sequence

from inkwell.domain.model import BlogPost
from inkwell.domain.repository import BlogPostRepository
from inkwell.domain.value import BlogPostId, CategoryId


class InMemoryBlogPostRepository(BlogPostRepository):
    """In-memory implementation of BlogPostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[BlogPostId, BlogPost] = {}

    async def find_by_id(self, blog_post_id: BlogPostId) -> Optional[BlogPost]:
        """Find a blog post by ID."""
        return self._posts.get(blog_post_id)

    async def find_by_ids(self, blog_post_ids: Sequence[BlogPostId]) -> list[BlogPost]:
        """Find blog posts by ID."""
        return [self._posts[i] for i in blog_post_ids if i in self._posts]

    async def exists(self, blog_post_id: BlogPostId) -> bool:
        """Check whether a blog post exists."""
        return blog_post_id in self._posts

    async def save(self, blog_post: BlogPost) -> BlogPost:
        """Save or update a blog post."""
        self._posts[blog_post.id] = blog_post
        return blog_post

    async def remove(self, blog_post_id: BlogPostId) -> None:
        """Drop a blog post (simulates deletion outside this service)."""
        self._posts.pop(blog_post_id, None)

    async def count_published(self, category_id: Optional[CategoryId] = None) -> int:
        """Count published posts, optionally within one category."""
        return sum(
            1
            for p in self._posts.values()
            if p.is_public and (category_id is None or p.category_id == category_id)
        )

    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count all posts in a category."""
        return sum(1 for p in self._posts.values() if p.category_id == category_id)

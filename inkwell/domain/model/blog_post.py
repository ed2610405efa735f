"""Blog post entity.

Blog posts are owned elsewhere; comments and categories only need to
check that they exist and whether they are published.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel, utcnow
from inkwell.domain.value import BlogPostId, CategoryId, PostStatus, Slug, UserId


class BlogPost(DomainModel):
    """Blog post entity (read-mostly reference)."""

    id: BlogPostId
    title: str = Field(min_length=1, max_length=300)
    slug: Slug
    author_id: UserId
    category_id: Optional[CategoryId] = None
    status: PostStatus = PostStatus.DRAFT
    is_published: bool = False
    published_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_public(self) -> bool:
        """Published flag set and status published."""
        return self.is_published and self.status == PostStatus.PUBLISHED

"""Category entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel, utcnow
from inkwell.domain.value import CategoryId, HexColor, Slug


class Category(DomainModel):
    """Category entity.

    The slug is derived from the name and unique across all categories,
    active or not. ``posts_count`` is derived (published posts) and is
    never written back.
    """

    id: CategoryId
    name: str = Field(min_length=1, max_length=50)
    slug: Slug
    description: Optional[str] = Field(default=None, max_length=200)
    color: Optional[HexColor] = None
    icon: Optional[str] = Field(default=None, max_length=50)
    is_active: bool = True
    sort_order: int = Field(default=0, ge=0)
    posts_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_available_for_posts(self) -> bool:
        """Whether new posts may be filed under this category."""
        return self.is_active

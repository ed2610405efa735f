"""Category response DTOs."""

from datetime import datetime

from pydantic import BaseModel

from inkwell.domain.model import Category


class CategoryResponse(BaseModel):
    """A single category."""

    category_id: str
    name: str
    slug: str
    description: str | None
    color: str | None
    icon: str | None
    is_active: bool
    sort_order: int
    posts_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryResponse":
        return cls(
            category_id=str(category.id),
            name=category.name,
            slug=category.slug.root,
            description=category.description,
            color=category.color.root if category.color else None,
            icon=category.icon,
            is_active=category.is_active,
            sort_order=category.sort_order,
            posts_count=category.posts_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

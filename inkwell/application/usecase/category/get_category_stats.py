"""Category statistics for administrators."""

from pydantic import BaseModel

from inkwell.domain.service import CategoryService


class CategoryStatsItem(BaseModel):
    category_id: str
    name: str
    slug: str
    posts_count: int
    is_active: bool
    is_available_for_posts: bool


class GetCategoryStatsResponse(BaseModel):
    """Per-category stats plus overall counts."""

    total: int
    active: int
    inactive: int
    categories: list[CategoryStatsItem]


class GetCategoryStatsUseCase:
    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self) -> GetCategoryStatsResponse:
        counts = await self.category_service.get_categories_count()
        stats = await self.category_service.get_category_stats()
        return GetCategoryStatsResponse(
            total=counts.total,
            active=counts.active,
            inactive=counts.inactive,
            categories=[
                CategoryStatsItem(
                    category_id=str(s.category_id),
                    name=s.name,
                    slug=s.slug.root,
                    posts_count=s.posts_count,
                    is_active=s.is_active,
                    is_available_for_posts=s.is_available_for_posts,
                )
                for s in stats
            ],
        )

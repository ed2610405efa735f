"""Get category use case."""

from pydantic import BaseModel, model_validator

from inkwell.application.usecase.common import parse_id
from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId

from .dto import CategoryResponse


class GetCategoryRequest(BaseModel):
    """Look a category up by exactly one of id or slug.

    Soft-deleted categories are only found with ``include_inactive``.
    """

    category_id: str | None = None
    slug: str | None = None
    include_inactive: bool = False

    @model_validator(mode="after")
    def _one_key(self) -> "GetCategoryRequest":
        if (self.category_id is None) == (self.slug is None):
            raise ValueError("Provide exactly one of category_id or slug")
        return self


class GetCategoryUseCase:
    """Use case for fetching a category by id or slug."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> CategoryResponse:
        """Fetch a category.

        Raises:
            NotFoundError: If no category matches, or it is soft-deleted
                and ``include_inactive`` is not set
        """
        if request.slug is not None:
            category = await self.category_service.get_by_slug(
                request.slug, include_inactive=request.include_inactive
            )
            identifier = request.slug
        else:
            category_id = parse_id(request.category_id or "", CategoryId, "Category")
            category = await self.category_service.get_by_id(
                category_id, include_inactive=request.include_inactive
            )
            identifier = str(category_id)

        if category is None:
            raise NotFoundError("Category", identifier)
        return CategoryResponse.from_domain(category)

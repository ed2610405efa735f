"""List categories use case."""

from typing import Literal

from pydantic import BaseModel

from inkwell.application.usecase.common import PaginationResponse, build_page_request
from inkwell.domain.service import CategoryService
from inkwell.domain.value import SortOrder

from .dto import CategoryResponse

CategoryListScope = Literal["all", "active", "popular"]


class ListCategoriesRequest(BaseModel):
    """List categories request.

    ``page``, ``sort_by``, ``sort_order`` and ``is_active`` apply to the
    ``all`` scope. ``limit`` is the page size for ``all`` and the result
    size for ``popular``. ``is_active=None`` includes soft-deleted categories
    and is meant for admin callers only.
    """

    scope: CategoryListScope = "all"
    page: int = 1
    limit: int = 50
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    is_active: bool | None = True


class ListCategoriesResponse(BaseModel):
    data: list[CategoryResponse]
    pagination: PaginationResponse | None = None


class ListCategoriesUseCase:
    """Use case for the category listings."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        """List categories.

        Raises:
            ValidationError: If the page request is invalid
        """
        if request.scope == "active":
            categories = await self.category_service.get_active()
            return ListCategoriesResponse(
                data=[CategoryResponse.from_domain(c) for c in categories]
            )
        if request.scope == "popular":
            categories = await self.category_service.get_popular(request.limit)
            return ListCategoriesResponse(
                data=[CategoryResponse.from_domain(c) for c in categories]
            )

        page = build_page_request(
            request.page, request.limit, request.sort_by, request.sort_order
        )
        result = await self.category_service.get_all(page, is_active=request.is_active)
        return ListCategoriesResponse(
            data=[CategoryResponse.from_domain(c) for c in result.data],
            pagination=PaginationResponse.from_domain(result.pagination),
        )

"""Category routes.

Reads are public and only see active categories. Writes, stats and the
``include_inactive`` flag require the admin role.
"""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, Response, status
from pydantic import BaseModel

from inkwell.application.usecase.category import (
    BulkUpdateCategorySortOrderRequest,
    BulkUpdateCategorySortOrderUseCase,
    CategoryResponse,
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryRequest,
    GetCategoryStatsResponse,
    GetCategoryStatsUseCase,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    SortOrderItem,
    UpdateCategoryRequest,
    UpdateCategorySortOrderRequest,
    UpdateCategorySortOrderUseCase,
    UpdateCategoryUseCase,
)
from inkwell.domain.service import JWTService
from inkwell.domain.value import SortOrder
from inkwell.interface.api.auth import require_admin

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class UpdateCategoryAPIRequest(BaseModel):
    """Partial update. Omitted fields are left untouched."""

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class SortOrderAPIRequest(BaseModel):
    sort_order: int


class BulkSortOrderAPIRequest(BaseModel):
    entries: list[SortOrderItem]


def _check_include_inactive(
    include_inactive: bool, jwt_service: JWTService, auth_token: str | None
) -> None:
    if include_inactive:
        require_admin(jwt_service, auth_token)


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    use_case: FromDishka[ListCategoriesUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    limit: int = Query(default=50),
    sort_by: str | None = Query(default=None),
    sort_order: SortOrder = Query(default=SortOrder.ASC),
    include_inactive: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
) -> ListCategoriesResponse:
    """Active categories, one page at a time.

    Admins may pass ``include_inactive`` to see soft-deleted ones as well.
    """
    _check_include_inactive(include_inactive, jwt_service, auth_token)
    return await use_case.execute(
        ListCategoriesRequest(
            scope="all",
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
            is_active=None if include_inactive else True,
        )
    )


@router.get("/active", response_model=ListCategoriesResponse)
async def list_active_categories(
    use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """Categories that accept new posts."""
    return await use_case.execute(ListCategoriesRequest(scope="active"))


@router.get("/popular", response_model=ListCategoriesResponse)
async def list_popular_categories(
    use_case: FromDishka[ListCategoriesUseCase],
    limit: int = Query(default=10),
) -> ListCategoriesResponse:
    """Active categories with the most published posts."""
    return await use_case.execute(ListCategoriesRequest(scope="popular", limit=limit))


@router.get("/admin/stats", response_model=GetCategoryStatsResponse)
async def get_category_stats(
    use_case: FromDishka[GetCategoryStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCategoryStatsResponse:
    require_admin(jwt_service, auth_token)
    return await use_case.execute()


@router.get("/slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(
    slug: str,
    use_case: FromDishka[GetCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    include_inactive: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
) -> CategoryResponse:
    _check_include_inactive(include_inactive, jwt_service, auth_token)
    return await use_case.execute(
        GetCategoryRequest(slug=slug, include_inactive=include_inactive)
    )


@router.put("/bulk-sort-order", status_code=status.HTTP_204_NO_CONTENT)
async def bulk_update_sort_order(
    request: BulkSortOrderAPIRequest,
    use_case: FromDishka[BulkUpdateCategorySortOrderUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Reorder several categories. Nothing is written if any entry is invalid."""
    require_admin(jwt_service, auth_token)
    await use_case.execute(BulkUpdateCategorySortOrderRequest(entries=request.entries))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CreateCategoryRequest,
    use_case: FromDishka[CreateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CategoryResponse:
    require_admin(jwt_service, auth_token)
    return await use_case.execute(request)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    use_case: FromDishka[GetCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    include_inactive: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
) -> CategoryResponse:
    """Fetch an active category, or a soft-deleted one for admins."""
    _check_include_inactive(include_inactive, jwt_service, auth_token)
    return await use_case.execute(
        GetCategoryRequest(category_id=category_id, include_inactive=include_inactive)
    )


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    request: UpdateCategoryAPIRequest,
    use_case: FromDishka[UpdateCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CategoryResponse:
    """Apply a partial update. Renaming regenerates the slug."""
    require_admin(jwt_service, auth_token)
    fields = request.model_dump(include=request.model_fields_set)
    return await use_case.execute(
        UpdateCategoryRequest(category_id=category_id, **fields)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    use_case: FromDishka[DeleteCategoryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Delete a category, or deactivate it while it still has posts."""
    require_admin(jwt_service, auth_token)
    await use_case.execute(DeleteCategoryRequest(category_id=category_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{category_id}/sort-order", status_code=status.HTTP_204_NO_CONTENT)
async def update_sort_order(
    category_id: str,
    request: SortOrderAPIRequest,
    use_case: FromDishka[UpdateCategorySortOrderUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    require_admin(jwt_service, auth_token)
    await use_case.execute(
        UpdateCategorySortOrderRequest(
            category_id=category_id, sort_order=request.sort_order
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

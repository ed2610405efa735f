"""Category use cases."""

from .create_category import CreateCategoryRequest, CreateCategoryUseCase
from .delete_category import DeleteCategoryRequest, DeleteCategoryUseCase
from .dto import CategoryResponse
from .get_category import GetCategoryRequest, GetCategoryUseCase
from .get_category_stats import (
    CategoryStatsItem,
    GetCategoryStatsResponse,
    GetCategoryStatsUseCase,
)
from .list_categories import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .sort_order import (
    BulkUpdateCategorySortOrderRequest,
    BulkUpdateCategorySortOrderUseCase,
    SortOrderItem,
    UpdateCategorySortOrderRequest,
    UpdateCategorySortOrderUseCase,
)
from .update_category import UpdateCategoryRequest, UpdateCategoryUseCase

__all__ = [
    "BulkUpdateCategorySortOrderRequest",
    "BulkUpdateCategorySortOrderUseCase",
    "CategoryResponse",
    "CategoryStatsItem",
    "CreateCategoryRequest",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryStatsResponse",
    "GetCategoryStatsUseCase",
    "GetCategoryUseCase",
    "ListCategoriesRequest",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "SortOrderItem",
    "UpdateCategoryRequest",
    "UpdateCategorySortOrderRequest",
    "UpdateCategorySortOrderUseCase",
    "UpdateCategoryUseCase",
]

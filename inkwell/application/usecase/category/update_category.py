"""Update category use case."""

from typing import Optional

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.service import CategoryService, CategoryUpdate
from inkwell.domain.value import CategoryId

from .dto import CategoryResponse


class UpdateCategoryRequest(BaseModel):
    """Update category request.

    Only fields that are explicitly set are applied.
    """

    category_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class UpdateCategoryUseCase:
    """Use case for a partial category update."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> CategoryResponse:
        """Apply the update.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If a rename collides with another slug
            ValidationError: If a field is invalid
        """
        category_id = parse_id(request.category_id, CategoryId, "Category")
        changes = CategoryUpdate(
            **request.model_dump(
                include=request.model_fields_set - {"category_id"}
            )
        )
        category = await self.category_service.update(category_id, changes)
        return CategoryResponse.from_domain(category)

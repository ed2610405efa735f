"""Delete category use case."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId


class DeleteCategoryRequest(BaseModel):
    category_id: str


class DeleteCategoryUseCase:
    """Use case for deleting a category.

    Categories that still hold blog posts are deactivated instead of removed.
    """

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category does not exist or could not be deleted
        """
        category_id = parse_id(request.category_id, CategoryId, "Category")
        if not await self.category_service.delete(category_id):
            raise NotFoundError("Category", request.category_id)

"""Category ordering use cases."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId, SortOrderEntry


class UpdateCategorySortOrderRequest(BaseModel):
    category_id: str
    sort_order: int


class UpdateCategorySortOrderUseCase:
    """Use case for moving one category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategorySortOrderRequest) -> None:
        """Set the sort order.

        Raises:
            ValidationError: If the id is malformed or sort order negative
            NotFoundError: If the category does not exist
        """
        category_id = parse_id(request.category_id, CategoryId, "Category")
        await self.category_service.update_sort_order(category_id, request.sort_order)


class SortOrderItem(BaseModel):
    category_id: str
    sort_order: int


class BulkUpdateCategorySortOrderRequest(BaseModel):
    entries: list[SortOrderItem]


class BulkUpdateCategorySortOrderUseCase:
    """Use case for reordering several categories at once.

    All entries are validated before anything is written.
    """

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: BulkUpdateCategorySortOrderRequest) -> None:
        """Apply the new ordering.

        Raises:
            ValidationError: If any entry is malformed or the batch is invalid
            NotFoundError: If any category does not exist
        """
        entries = [
            SortOrderEntry(
                category_id=parse_id(item.category_id, CategoryId, "Category"),
                sort_order=item.sort_order,
            )
            for item in request.entries
        ]
        await self.category_service.bulk_update_sort_order(entries)

"""Create category use case."""

from pydantic import BaseModel

from inkwell.domain.service import CategoryService

from .dto import CategoryResponse


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str
    description: str | None = None
    color: str | None = None  # "#RRGGBB"
    icon: str | None = None
    sort_order: int | None = None  # Defaults to after the last category


class CreateCategoryUseCase:
    """Use case for creating a category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CategoryResponse:
        """Create a category.

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If the derived slug is already taken
        """
        category = await self.category_service.create(
            name=request.name,
            description=request.description,
            color=request.color,
            icon=request.icon,
            sort_order=request.sort_order,
        )
        return CategoryResponse.from_domain(category)

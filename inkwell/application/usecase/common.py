"""Helpers shared by use cases: id parsing and pagination DTOs."""

from typing import Callable, TypeVar
from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import ValidationError
from inkwell.domain.value import PageRequest, Pagination, SortOrder

IdT = TypeVar("IdT")


def parse_id(value: str, id_type: Callable[[UUID], IdT], label: str) -> IdT:
    """Parse a UUID string into a typed identifier.

    Raises:
        ValidationError: If value is blank or not a UUID
    """
    if not value or not value.strip():
        raise ValidationError(f"{label} ID is required")
    try:
        return id_type(UUID(value.strip()))
    except ValueError:
        raise ValidationError(f"Invalid {label} ID: {value}")


def build_page_request(
    page: int, limit: int, sort_by: str | None, sort_order: SortOrder
) -> PageRequest:
    """Build a page request, rejecting non-positive page numbers and sizes."""
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if limit < 1:
        raise ValidationError("Limit must be at least 1")
    return PageRequest(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)


class PaginationResponse(BaseModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_domain(cls, pagination: Pagination) -> "PaginationResponse":
        return cls(**pagination.model_dump())

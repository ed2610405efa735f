"""Query value objects: page requests, pagination envelopes and filters."""

import math
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from inkwell.domain.value.common import ValueObject
from inkwell.domain.value.identifiers import BlogPostId, UserId
from inkwell.domain.value.types import CommentStatus, SortOrder

T = TypeVar("T")


class PageRequest(ValueObject):
    """Requested page of a listing."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        """Number of rows to skip."""
        return (self.page - 1) * self.limit


class Pagination(ValueObject):
    """Pagination metadata returned alongside a page of results."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """Derive page counts and navigation flags from a total."""
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class Page(BaseModel, Generic[T]):
    """A page of results plus its pagination metadata."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: list[T]
    pagination: Pagination

    @classmethod
    def empty(cls, request: PageRequest) -> "Page[T]":
        """An empty page for the given request."""
        return cls(data=[], pagination=Pagination.build(request.page, request.limit, 0))


class CommentFilter(ValueObject):
    """Filters understood by comment listings.

    Inactive comments are always excluded; these narrow the active set.
    """

    blog_post_id: BlogPostId | None = None
    author_id: UserId | None = None
    status: CommentStatus | None = None
    top_level_only: bool = False
    search: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None

"""List comments by author, moderation queue, search, recency or date."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, field_validator

from inkwell.application.usecase.common import (
    PaginationResponse,
    build_page_request,
    parse_id,
)
from inkwell.domain.error import ValidationError
from inkwell.domain.service import CommentService
from inkwell.domain.value import SortOrder, UserId

from .dto import CommentResponse

CommentListScope = Literal["author", "pending", "search", "recent", "date_range"]


class ListCommentsRequest(BaseModel):
    """List comments request.

    Which optional fields are required depends on ``scope``:
    ``author`` needs author_id, ``search`` needs query and ``date_range``
    needs start and end.
    """

    scope: CommentListScope
    author_id: str | None = None
    query: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    page: int = 1
    limit: int = 20
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    @field_validator("start", "end")
    @classmethod
    def _assume_utc(cls, v: datetime | None) -> datetime | None:
        """Naive datetimes are taken as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ListCommentsResponse(BaseModel):
    """List comments response. Unpaged scopes carry no pagination."""

    data: list[CommentResponse]
    pagination: PaginationResponse | None = None


class ListCommentsUseCase:
    """Use case for the comment listings used by authors and moderators."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """List comments for the requested scope.

        Raises:
            ValidationError: If a scope parameter is missing or invalid
        """
        if request.scope == "recent":
            comments = await self.comment_service.get_recent_comments(request.limit)
            return ListCommentsResponse(
                data=[CommentResponse.from_domain(c) for c in comments]
            )

        if request.scope == "date_range":
            if request.start is None or request.end is None:
                raise ValidationError("Start and end dates are required")
            comments = await self.comment_service.get_comments_by_date_range(
                request.start, request.end
            )
            return ListCommentsResponse(
                data=[CommentResponse.from_domain(c) for c in comments]
            )

        page = build_page_request(
            request.page, request.limit, request.sort_by, request.sort_order
        )
        if request.scope == "author":
            if not request.author_id:
                raise ValidationError("Author ID is required")
            author_id = parse_id(request.author_id, UserId, "Author")
            result = await self.comment_service.get_by_author(author_id, page)
        elif request.scope == "pending":
            result = await self.comment_service.get_pending(page)
        else:
            result = await self.comment_service.search_comments(
                request.query or "", page
            )

        return ListCommentsResponse(
            data=[CommentResponse.from_domain(c) for c in result.data],
            pagination=PaginationResponse.from_domain(result.pagination),
        )

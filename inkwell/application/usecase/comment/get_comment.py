"""Get comment use case."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId

from .dto import CommentResponse


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentUseCase:
    """Use case for fetching one active comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentResponse:
        """Fetch a comment.

        Raises:
            ValidationError: If the id is malformed
            NotFoundError: If the comment is missing or inactive
        """
        comment_id = parse_id(request.comment_id, CommentId, "Comment")
        comment = await self.comment_service.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)
        return CommentResponse.from_domain(comment)

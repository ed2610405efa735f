"""Update comment use case."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.error import NotAuthorizedError, NotFoundError
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, CommentStatus, UserId

from .dto import CommentResponse


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str  # Authenticated user
    is_moderator: bool = False
    content: str | None = None
    status: CommentStatus | None = None


class UpdateCommentUseCase:
    """Use case for editing or moderating a comment.

    Authors may edit the content of their own comments. Moderators may edit
    any comment and are the only ones allowed to change its status.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment is missing or inactive
            NotAuthorizedError: If the user may not make this change
            ValidationError: If the change breaks a content or status rule
        """
        comment_id = parse_id(request.comment_id, CommentId, "Comment")
        user_id = parse_id(request.user_id, UserId, "User")

        comment = await self.comment_service.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        is_author = comment.author_id == user_id
        if request.status is not None and not request.is_moderator:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)
        if not is_author and not request.is_moderator:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        updated = await self.comment_service.update(
            comment_id, content=request.content, status=request.status
        )
        return CommentResponse.from_domain(updated)

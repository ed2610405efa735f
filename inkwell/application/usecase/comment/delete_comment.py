"""Delete comment use case."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.error import NotAuthorizedError, NotFoundError
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str
    is_moderator: bool = False
    hard: bool = False  # Permanently remove the row; admins only


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    deleted: bool


class DeleteCommentUseCase:
    """Use case for soft or hard deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Delete a comment.

        Soft deletion is open to the author and to moderators. Hard deletion
        is gated by the caller (admin route) and also deactivates replies.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user neither wrote nor moderates it
        """
        comment_id = parse_id(request.comment_id, CommentId, "Comment")
        user_id = parse_id(request.user_id, UserId, "User")

        if request.hard:
            return DeleteCommentResponse(
                deleted=await self.comment_service.hard_delete(comment_id)
            )

        comment = await self.comment_service.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)
        if comment.author_id != user_id and not request.is_moderator:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        return DeleteCommentResponse(
            deleted=await self.comment_service.delete(comment_id)
        )

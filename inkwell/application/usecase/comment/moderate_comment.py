"""Single and bulk comment moderation use cases."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId

from .dto import BulkFailureResponse, BulkModerationResponse, CommentResponse

ModerationAction = Literal["approve", "reject"]


class ModerateCommentRequest(BaseModel):
    """Approve or reject one comment."""

    comment_id: str
    action: ModerationAction


class ModerateCommentUseCase:
    """Use case for moderating a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> CommentResponse:
        """Approve or reject a comment.

        Raises:
            NotFoundError: If the comment is missing or inactive
        """
        comment_id = parse_id(request.comment_id, CommentId, "Comment")
        if request.action == "approve":
            comment = await self.comment_service.approve(comment_id)
        else:
            comment = await self.comment_service.reject(comment_id)
        return CommentResponse.from_domain(comment)


class BulkModerateCommentsRequest(BaseModel):
    """Approve or reject a batch of comments."""

    comment_ids: list[str]
    action: ModerationAction


class BulkModerateCommentsUseCase:
    """Use case for moderating a batch of comments.

    Malformed ids are reported as failures next to the ones the service
    could not process; they never abort the batch.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: BulkModerateCommentsRequest
    ) -> BulkModerationResponse:
        """Run the batch.

        Raises:
            ValidationError: If the batch is empty or too large
        """
        valid: list[CommentId] = []
        invalid: list[BulkFailureResponse] = []
        for raw in request.comment_ids:
            try:
                valid.append(CommentId(UUID(raw)))
            except ValueError:
                invalid.append(BulkFailureResponse(id=raw, reason="Invalid comment ID"))

        if request.comment_ids and not valid:
            return BulkModerationResponse(succeeded=[], failed=invalid)

        if request.action == "approve":
            result = await self.comment_service.approve_multiple(valid)
        else:
            result = await self.comment_service.reject_multiple(valid)
        return BulkModerationResponse.from_domain(result, extra_failures=invalid)

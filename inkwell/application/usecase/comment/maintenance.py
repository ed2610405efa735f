"""Comment maintenance use cases: rejected cleanup and orphan detection."""

from pydantic import BaseModel

from inkwell.domain.service import CommentService

from .dto import CommentResponse


class CleanupRejectedCommentsRequest(BaseModel):
    """Cleanup request. ``days_old`` defaults to the configured retention."""

    days_old: int | None = None


class CleanupRejectedCommentsResponse(BaseModel):
    deactivated: int


class CleanupRejectedCommentsUseCase:
    """Use case for soft-deleting stale rejected comments."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: CleanupRejectedCommentsRequest
    ) -> CleanupRejectedCommentsResponse:
        deactivated = await self.comment_service.cleanup_old_rejected_comments(
            request.days_old
        )
        return CleanupRejectedCommentsResponse(deactivated=deactivated)


class GetOrphanedCommentsResponse(BaseModel):
    data: list[CommentResponse]


class GetOrphanedCommentsUseCase:
    """Use case listing active comments whose post or parent is gone."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self) -> GetOrphanedCommentsResponse:
        orphans = await self.comment_service.get_orphaned_comments()
        return GetOrphanedCommentsResponse(
            data=[CommentResponse.from_domain(c) for c in orphans]
        )

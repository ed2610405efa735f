"""Comment routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.comment import (
    BulkModerateCommentsRequest,
    BulkModerateCommentsUseCase,
    BulkModerationResponse,
    CleanupRejectedCommentsRequest,
    CleanupRejectedCommentsResponse,
    CleanupRejectedCommentsUseCase,
    CommentResponse,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentAnalyticsRequest,
    GetCommentAnalyticsResponse,
    GetCommentAnalyticsUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    GetOrphanedCommentsResponse,
    GetOrphanedCommentsUseCase,
    GetPostCommentsRequest,
    GetPostCommentsResponse,
    GetPostCommentsUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from inkwell.domain.service import JWTService
from inkwell.domain.value import CommentStatus, SortOrder
from inkwell.interface.api.auth import authenticate, require_admin, require_moderator

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    blog_post_id: str
    content: str = Field(max_length=10000)
    parent_id: str | None = None  # Top-level comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing or moderating a comment."""

    content: str | None = Field(default=None, max_length=10000)
    status: CommentStatus | None = None


class BulkCommentsAPIRequest(BaseModel):
    comment_ids: list[str]


class CleanupAPIRequest(BaseModel):
    days_old: int | None = None


# ----------------------------------------------------------------------
# Static paths (must be registered before /{comment_id})
# ----------------------------------------------------------------------


@router.get("/post/{blog_post_id}", response_model=GetPostCommentsResponse)
async def get_post_comments(
    blog_post_id: str,
    use_case: FromDishka[GetPostCommentsUseCase],
    page: int = Query(default=1),
    limit: int = Query(default=20),
    sort_by: str | None = Query(default=None),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
) -> GetPostCommentsResponse:
    """Approved comment threads of a blog post. Public."""
    return await use_case.execute(
        GetPostCommentsRequest(
            blog_post_id=blog_post_id,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    )


@router.get("/author/{author_id}", response_model=ListCommentsResponse)
async def get_author_comments(
    author_id: str,
    use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    limit: int = Query(default=20),
    sort_by: str | None = Query(default=None),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """An author's comments in every status.

    Authors see their own; moderators see anyone's.
    """
    payload = authenticate(jwt_service, auth_token)
    if payload.user_id != author_id and not jwt_service.is_moderator(payload):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot list another author's comments",
        )
    return await use_case.execute(
        ListCommentsRequest(
            scope="author",
            author_id=author_id,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    )


@router.get("/pending", response_model=ListCommentsResponse)
async def get_pending_comments(
    use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1),
    limit: int = Query(default=20),
    sort_by: str | None = Query(default=None),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """Moderation queue."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        ListCommentsRequest(
            scope="pending",
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    )


@router.get("/search", response_model=ListCommentsResponse)
async def search_comments(
    use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    q: str = Query(default=""),
    page: int = Query(default=1),
    limit: int = Query(default=20),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """Search comment content (any status)."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        ListCommentsRequest(scope="search", query=q, page=page, limit=limit)
    )


@router.get("/recent", response_model=ListCommentsResponse)
async def get_recent_comments(
    use_case: FromDishka[ListCommentsUseCase],
    limit: int = Query(default=10),
) -> ListCommentsResponse:
    """Newest approved comments. Public."""
    return await use_case.execute(ListCommentsRequest(scope="recent", limit=limit))


@router.get("/date-range", response_model=ListCommentsResponse)
async def get_comments_by_date_range(
    use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    start: datetime = Query(),
    end: datetime = Query(),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """Comments created within a time window."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        ListCommentsRequest(scope="date_range", start=start, end=end)
    )


@router.get("/stats", response_model=GetCommentAnalyticsResponse)
async def get_comment_stats(
    use_case: FromDishka[GetCommentAnalyticsUseCase],
    jwt_service: FromDishka[JWTService],
    top_limit: int = Query(default=10),
    trend_days: int = Query(default=30),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentAnalyticsResponse:
    """Counts, engagement, rankings and daily trends."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        GetCommentAnalyticsRequest(top_limit=top_limit, trend_days=trend_days)
    )


@router.get("/orphaned", response_model=GetOrphanedCommentsResponse)
async def get_orphaned_comments(
    use_case: FromDishka[GetOrphanedCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetOrphanedCommentsResponse:
    """Active comments whose blog post or parent no longer exists."""
    require_admin(jwt_service, auth_token)
    return await use_case.execute()


@router.post("/cleanup", response_model=CleanupRejectedCommentsResponse)
async def cleanup_rejected_comments(
    use_case: FromDishka[CleanupRejectedCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    request: CleanupAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
) -> CleanupRejectedCommentsResponse:
    """Soft-delete rejected comments older than the retention window."""
    require_admin(jwt_service, auth_token)
    days_old = request.days_old if request else None
    return await use_case.execute(CleanupRejectedCommentsRequest(days_old=days_old))


@router.post(
    "", response_model=CreateCommentResponse, status_code=status.HTTP_201_CREATED
)
async def create_comment(
    request: CreateCommentAPIRequest,
    use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a blog post or reply to a top-level comment.

    New comments start pending.
    """
    payload = authenticate(jwt_service, auth_token)
    return await use_case.execute(
        CreateCommentRequest(
            blog_post_id=request.blog_post_id,
            content=request.content,
            author_id=payload.user_id,
            parent_id=request.parent_id,
        )
    )


@router.post(
    "/with-spam-detection",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment_with_spam_detection(
    request: CreateCommentAPIRequest,
    use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment from sanitized content and report its spam score."""
    payload = authenticate(jwt_service, auth_token)
    return await use_case.execute(
        CreateCommentRequest(
            blog_post_id=request.blog_post_id,
            content=request.content,
            author_id=payload.user_id,
            parent_id=request.parent_id,
            detect_spam=True,
        )
    )


@router.post("/bulk-approve", response_model=BulkModerationResponse)
async def bulk_approve_comments(
    request: BulkCommentsAPIRequest,
    use_case: FromDishka[BulkModerateCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> BulkModerationResponse:
    """Approve a batch. Failures are reported per id."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        BulkModerateCommentsRequest(comment_ids=request.comment_ids, action="approve")
    )


@router.post("/bulk-reject", response_model=BulkModerationResponse)
async def bulk_reject_comments(
    request: BulkCommentsAPIRequest,
    use_case: FromDishka[BulkModerateCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> BulkModerationResponse:
    """Reject a batch. Failures are reported per id."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        BulkModerateCommentsRequest(comment_ids=request.comment_ids, action="reject")
    )


# ----------------------------------------------------------------------
# Single comment
# ----------------------------------------------------------------------


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: str, use_case: FromDishka[GetCommentUseCase]
) -> CommentResponse:
    """Fetch one active comment."""
    return await use_case.execute(GetCommentRequest(comment_id=comment_id))


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Edit a pending comment's content, or change status as a moderator."""
    payload = authenticate(jwt_service, auth_token)
    return await use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id,
            user_id=payload.user_id,
            is_moderator=jwt_service.is_moderator(payload),
            content=request.content,
            status=request.status,
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    hard: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Soft delete a comment, or remove it permanently (admins, ``?hard=true``)."""
    if hard:
        payload = require_admin(jwt_service, auth_token)
    else:
        payload = authenticate(jwt_service, auth_token)

    result = await use_case.execute(
        DeleteCommentRequest(
            comment_id=comment_id,
            user_id=payload.user_id,
            is_moderator=jwt_service.is_moderator(payload),
            hard=hard,
        )
    )
    if not result.deleted:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment",
        )
    return result


@router.put("/{comment_id}/approve", response_model=CommentResponse)
async def approve_comment(
    comment_id: str,
    use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Approve a comment."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        ModerateCommentRequest(comment_id=comment_id, action="approve")
    )


@router.put("/{comment_id}/reject", response_model=CommentResponse)
async def reject_comment(
    comment_id: str,
    use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Reject a comment."""
    require_moderator(jwt_service, auth_token)
    return await use_case.execute(
        ModerateCommentRequest(comment_id=comment_id, action="reject")
    )

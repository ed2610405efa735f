"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .dto import (
    BulkFailureResponse,
    BulkModerationResponse,
    CommentResponse,
    CommentThreadResponse,
)
from .get_comment import GetCommentRequest, GetCommentUseCase
from .get_comment_analytics import (
    GetCommentAnalyticsRequest,
    GetCommentAnalyticsResponse,
    GetCommentAnalyticsUseCase,
)
from .get_post_comments import (
    GetPostCommentsRequest,
    GetPostCommentsResponse,
    GetPostCommentsUseCase,
)
from .list_comments import ListCommentsRequest, ListCommentsResponse, ListCommentsUseCase
from .maintenance import (
    CleanupRejectedCommentsRequest,
    CleanupRejectedCommentsResponse,
    CleanupRejectedCommentsUseCase,
    GetOrphanedCommentsResponse,
    GetOrphanedCommentsUseCase,
)
from .moderate_comment import (
    BulkModerateCommentsRequest,
    BulkModerateCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
)
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "BulkFailureResponse",
    "BulkModerateCommentsRequest",
    "BulkModerateCommentsUseCase",
    "BulkModerationResponse",
    "CleanupRejectedCommentsRequest",
    "CleanupRejectedCommentsResponse",
    "CleanupRejectedCommentsUseCase",
    "CommentResponse",
    "CommentThreadResponse",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentAnalyticsRequest",
    "GetCommentAnalyticsResponse",
    "GetCommentAnalyticsUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "GetOrphanedCommentsResponse",
    "GetOrphanedCommentsUseCase",
    "GetPostCommentsRequest",
    "GetPostCommentsResponse",
    "GetPostCommentsUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ModerateCommentRequest",
    "ModerateCommentUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]

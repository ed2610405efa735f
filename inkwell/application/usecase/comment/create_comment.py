"""Create comment use case."""

from pydantic import BaseModel

from inkwell.application.usecase.common import parse_id
from inkwell.domain.service import CommentService
from inkwell.domain.value import BlogPostId, CommentId, UserId

from .dto import CommentResponse


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    blog_post_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Top-level comment ID for replies
    detect_spam: bool = False


class CreateCommentResponse(BaseModel):
    """Create comment response.

    Spam fields are only filled when spam detection was requested.
    """

    comment: CommentResponse
    spam_score: float | None = None
    spam_signals: list[str] = []
    auto_approved: bool = False


class CreateCommentUseCase:
    """Use case for commenting on a blog post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment, with spam assessment when requested

        Raises:
            ValidationError: If ids are malformed or the comment breaks a rule
            NotFoundError: If the post or parent comment does not exist
        """
        blog_post_id = parse_id(request.blog_post_id, BlogPostId, "Blog post")
        author_id = parse_id(request.author_id, UserId, "User")
        parent_id = (
            parse_id(request.parent_id, CommentId, "Parent comment")
            if request.parent_id
            else None
        )

        if not request.detect_spam:
            comment = await self.comment_service.create(
                content=request.content,
                blog_post_id=blog_post_id,
                author_id=author_id,
                parent_id=parent_id,
            )
            return CreateCommentResponse(comment=CommentResponse.from_domain(comment))

        checked = await self.comment_service.create_with_spam_detection(
            content=request.content,
            blog_post_id=blog_post_id,
            author_id=author_id,
            parent_id=parent_id,
        )
        return CreateCommentResponse(
            comment=CommentResponse.from_domain(checked.comment),
            spam_score=checked.spam_score,
            spam_signals=checked.spam_signals,
            auto_approved=checked.auto_approved,
        )

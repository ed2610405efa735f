"""Get the comment threads of a blog post."""

from pydantic import BaseModel

from inkwell.application.usecase.common import (
    PaginationResponse,
    build_page_request,
    parse_id,
)
from inkwell.domain.service import CommentService
from inkwell.domain.value import BlogPostId, SortOrder

from .dto import CommentThreadResponse


class GetPostCommentsRequest(BaseModel):
    """Get post comments request."""

    blog_post_id: str
    page: int = 1
    limit: int = 20
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC


class GetPostCommentsResponse(BaseModel):
    """Approved threads of a post plus its approved comment total."""

    data: list[CommentThreadResponse]
    pagination: PaginationResponse
    total_comments: int


class GetPostCommentsUseCase:
    """Use case for reading the public comment threads under a blog post."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetPostCommentsRequest) -> GetPostCommentsResponse:
        """Fetch one page of threads.

        Raises:
            ValidationError: If the id or page request is invalid
            NotFoundError: If the blog post does not exist
        """
        blog_post_id = parse_id(request.blog_post_id, BlogPostId, "Blog post")
        page = build_page_request(
            request.page, request.limit, request.sort_by, request.sort_order
        )

        threads = await self.comment_service.get_by_blog_post(blog_post_id, page)
        total = await self.comment_service.count_comments_by_blog_post(blog_post_id)

        return GetPostCommentsResponse(
            data=[CommentThreadResponse.from_thread(t) for t in threads.data],
            pagination=PaginationResponse.from_domain(threads.pagination),
            total_comments=total,
        )

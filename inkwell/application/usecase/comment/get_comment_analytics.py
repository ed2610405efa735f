"""Comment analytics for the moderation dashboard."""

from datetime import date

from pydantic import BaseModel

from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentStatus


class CommentStatsResponse(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    inactive: int
    total_replies: int
    average_comments_per_post: float


class EngagementResponse(BaseModel):
    average_comments_per_post: float
    average_replies_per_comment: float
    engagement_rate: float


class TopPostResponse(BaseModel):
    blog_post_id: str
    title: str | None
    slug: str | None
    comment_count: int


class TopCommenterResponse(BaseModel):
    author_id: str
    comment_count: int


class TrendBucketResponse(BaseModel):
    day: date
    status: CommentStatus
    count: int


class GetCommentAnalyticsRequest(BaseModel):
    """Analytics request."""

    top_limit: int = 10
    trend_days: int = 30


class GetCommentAnalyticsResponse(BaseModel):
    """Analytics response."""

    stats: CommentStatsResponse
    engagement: EngagementResponse
    top_posts: list[TopPostResponse]
    top_commenters: list[TopCommenterResponse]
    trends: list[TrendBucketResponse]


class GetCommentAnalyticsUseCase:
    """Use case aggregating comment statistics, rankings and daily trends."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: GetCommentAnalyticsRequest
    ) -> GetCommentAnalyticsResponse:
        """Collect analytics.

        Raises:
            ValidationError: If the ranking limit or trend window is out of range
        """
        stats = await self.comment_service.get_comment_stats()
        engagement = await self.comment_service.get_comment_engagement_stats()
        top_posts = await self.comment_service.get_top_commented_posts(
            request.top_limit
        )
        commenters = await self.comment_service.get_most_active_commenters(
            request.top_limit
        )
        trends = await self.comment_service.get_comment_trends(request.trend_days)

        return GetCommentAnalyticsResponse(
            stats=CommentStatsResponse(**stats.model_dump()),
            engagement=EngagementResponse(**engagement.model_dump()),
            top_posts=[
                TopPostResponse(
                    blog_post_id=str(p.blog_post_id),
                    title=p.title,
                    slug=p.slug.root if p.slug else None,
                    comment_count=p.comment_count,
                )
                for p in top_posts
            ],
            top_commenters=[
                TopCommenterResponse(
                    author_id=str(c.author_id), comment_count=c.comment_count
                )
                for c in commenters
            ],
            trends=[
                TrendBucketResponse(day=t.day, status=t.status, count=t.count)
                for t in trends
            ],
        )

"""Unit tests for the comment listing and analytics use cases."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from inkwell.application.usecase.comment import (
    CleanupRejectedCommentsRequest,
    CleanupRejectedCommentsUseCase,
    GetCommentAnalyticsRequest,
    GetCommentAnalyticsUseCase,
    GetPostCommentsRequest,
    GetPostCommentsUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
)
from inkwell.domain.error import ValidationError
from inkwell.domain.repository import BlogPostRepository, CommentRepository
from inkwell.domain.value import CommentStatus, UserId
from tests.factories import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetPostCommentsUseCase:
    """Tests for GetPostCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_threads_with_total(self, unit_env):
        """The total counts approved replies as well as top-level comments."""
        # Arrange
        use_case = await unit_env.get(GetPostCommentsUseCase)
        posts = await unit_env.get(BlogPostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        top = await comments.save(make_comment(post.id, status=CommentStatus.APPROVED))
        reply = await comments.save(
            make_comment(post.id, status=CommentStatus.APPROVED, parent_id=top.id)
        )

        # Act
        response = await use_case.execute(
            GetPostCommentsRequest(blog_post_id=str(post.id))
        )

        # Assert
        assert response.total_comments == 2
        assert len(response.data) == 1
        assert response.data[0].comment_id == str(top.id)
        assert [r.comment_id for r in response.data[0].replies] == [str(reply.id)]
        assert response.pagination.total == 1

    @pytest.mark.asyncio
    async def test_page_zero_rejected(self, unit_env):
        use_case = await unit_env.get(GetPostCommentsUseCase)

        with pytest.raises(ValidationError, match="Page"):
            await use_case.execute(
                GetPostCommentsRequest(blog_post_id=str(uuid4()), page=0)
            )


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_author_scope(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)
        posts = await unit_env.get(BlogPostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        author = UserId(uuid4())
        mine = await comments.save(make_comment(post.id, author_id=author))
        await comments.save(make_comment(post.id))

        response = await use_case.execute(
            ListCommentsRequest(scope="author", author_id=str(author))
        )

        assert [c.comment_id for c in response.data] == [str(mine.id)]
        assert response.pagination.total == 1

    @pytest.mark.asyncio
    async def test_author_scope_requires_id(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)

        with pytest.raises(ValidationError, match="Author ID"):
            await use_case.execute(ListCommentsRequest(scope="author"))

    @pytest.mark.asyncio
    async def test_recent_scope_is_unpaged(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)
        posts = await unit_env.get(BlogPostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        await comments.save(make_comment(post.id, status=CommentStatus.APPROVED))

        response = await use_case.execute(ListCommentsRequest(scope="recent", limit=5))

        assert len(response.data) == 1
        assert response.pagination is None

    @pytest.mark.asyncio
    async def test_date_range_requires_both_bounds(self, unit_env):
        use_case = await unit_env.get(ListCommentsUseCase)

        with pytest.raises(ValidationError, match="Start and end"):
            await use_case.execute(
                ListCommentsRequest(scope="date_range", start=datetime(2024, 1, 1))
            )

    @pytest.mark.asyncio
    async def test_date_range_accepts_naive_bounds(self, unit_env):
        """Naive datetimes are read as UTC."""
        use_case = await unit_env.get(ListCommentsUseCase)
        posts = await unit_env.get(BlogPostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        comment = await comments.save(make_comment(post.id, age=timedelta(hours=1)))
        now = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(minutes=1)

        response = await use_case.execute(
            ListCommentsRequest(
                scope="date_range", start=now - timedelta(days=1), end=now
            )
        )

        assert [c.comment_id for c in response.data] == [str(comment.id)]


class TestAnalyticsAndMaintenance:
    """Tests for GetCommentAnalyticsUseCase and cleanup."""

    @pytest.mark.asyncio
    async def test_analytics_on_empty_store(self, unit_env):
        use_case = await unit_env.get(GetCommentAnalyticsUseCase)

        response = await use_case.execute(GetCommentAnalyticsRequest())

        assert response.stats.total == 0
        assert response.engagement.engagement_rate == 0
        assert response.top_posts == []
        assert response.trends == []

    @pytest.mark.asyncio
    async def test_analytics_rejects_bad_limit(self, unit_env):
        use_case = await unit_env.get(GetCommentAnalyticsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(GetCommentAnalyticsRequest(top_limit=0))

    @pytest.mark.asyncio
    async def test_cleanup_uses_configured_retention(self, unit_env):
        use_case = await unit_env.get(CleanupRejectedCommentsUseCase)
        posts = await unit_env.get(BlogPostRepository)
        comments = await unit_env.get(CommentRepository)
        post = await posts.save(make_post())
        await comments.save(
            make_comment(post.id, status=CommentStatus.REJECTED, age=timedelta(days=31))
        )
        await comments.save(
            make_comment(post.id, status=CommentStatus.REJECTED, age=timedelta(days=5))
        )

        default = await use_case.execute(CleanupRejectedCommentsRequest())
        aggressive = await use_case.execute(CleanupRejectedCommentsRequest(days_old=1))

        assert default.deactivated == 1
        assert aggressive.deactivated == 1

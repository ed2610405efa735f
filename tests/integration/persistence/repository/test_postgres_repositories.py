"""Integration tests for the PostgreSQL repositories.

These tests need a migrated PostgreSQL database (``DATABASE__URL``) and are
deselected by default. Run them with ``pytest -m integration``.
"""

from uuid import uuid4

from dishka import AsyncContainer
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.error import ConflictError
from inkwell.domain.repository import (
    BlogPostRepository,
    CategoryRepository,
    CommentRepository,
)
from inkwell.domain.service import CategoryService, CommentService
from inkwell.domain.value import CommentId, CommentStatus, PageRequest, SortOrderEntry
from tests.factories import make_category, make_comment, make_post
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(text("TRUNCATE TABLE comments, blog_posts, categories CASCADE"))
    await session.commit()
    yield


class TestCommentRepositoryIntegration:
    """Comment persistence against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_round_trip_keeps_value_types(self, integration_env: AsyncContainer):
        # Arrange
        posts = await integration_env.get(BlogPostRepository)
        comments = await integration_env.get(CommentRepository)
        post = await posts.save(make_post())
        comment = make_comment(post.id, status=CommentStatus.APPROVED)

        # Act
        await comments.save(comment)
        found = await comments.find_by_id(comment.id)

        # Assert
        assert found is not None
        assert found.status == CommentStatus.APPROVED
        assert found.blog_post_id == post.id
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_bulk_approve_in_one_statement(self, integration_env: AsyncContainer):
        """Only active comments change; the rest are reported by the service."""
        # Arrange
        posts = await integration_env.get(BlogPostRepository)
        comments = await integration_env.get(CommentRepository)
        service = await integration_env.get(CommentService)
        post = await posts.save(make_post())
        pending = await comments.save(make_comment(post.id))
        inactive = await comments.save(make_comment(post.id, is_active=False))
        missing = CommentId(uuid4())

        # Act
        result = await service.approve_multiple([pending.id, inactive.id, missing])

        # Assert
        assert [c.id for c in result.succeeded] == [pending.id]
        assert result.succeeded[0].status == CommentStatus.APPROVED
        assert {f.reason for f in result.failed} == {
            "Comment is inactive",
            "Comment not found",
        }

    @pytest.mark.asyncio
    async def test_threads_and_stats(self, integration_env: AsyncContainer):
        posts = await integration_env.get(BlogPostRepository)
        comments = await integration_env.get(CommentRepository)
        service = await integration_env.get(CommentService)
        post = await posts.save(make_post())
        top = await comments.save(make_comment(post.id, status=CommentStatus.APPROVED))
        await comments.save(
            make_comment(post.id, status=CommentStatus.APPROVED, parent_id=top.id)
        )
        await comments.save(make_comment(post.id, status=CommentStatus.REJECTED))

        threads = await service.get_by_blog_post(post.id)
        stats = await service.get_comment_stats()

        assert threads.pagination.total == 1
        assert threads.data[0].replies_count == 1
        assert (stats.total, stats.approved, stats.rejected) == (3, 2, 1)
        assert stats.total_replies == 1

    @pytest.mark.asyncio
    async def test_search_matches_wildcard_characters_literally(
        self, integration_env: AsyncContainer
    ):
        posts = await integration_env.get(BlogPostRepository)
        comments = await integration_env.get(CommentRepository)
        post = await posts.save(make_post())
        discount = await comments.save(
            make_comment(post.id, "We got 50% OFF last week")
        )
        await comments.save(make_comment(post.id, "We got 500 off last week"))
        await comments.save(make_comment(post.id, "Snake_case is fine here"))
        await comments.save(make_comment(post.id, "Some code review here"))

        percent = await comments.search("50% off", PageRequest())
        underscore = await comments.search("e_c", PageRequest())

        assert [c.id for c in percent.data] == [discount.id]
        assert [c.content for c in underscore.data] == ["Snake_case is fine here"]

    @pytest.mark.asyncio
    async def test_hard_delete_leaves_inactive_replies(
        self, integration_env: AsyncContainer
    ):
        posts = await integration_env.get(BlogPostRepository)
        comments = await integration_env.get(CommentRepository)
        service = await integration_env.get(CommentService)
        post = await posts.save(make_post())
        top = await comments.save(make_comment(post.id, status=CommentStatus.APPROVED))
        reply = await comments.save(
            make_comment(post.id, status=CommentStatus.APPROVED, parent_id=top.id)
        )

        await service.hard_delete(top.id)

        assert await comments.find_by_id(top.id) is None
        assert not (await comments.find_by_id(reply.id)).is_active
        assert [c.id for c in await service.get_orphaned_comments()] == []


class TestCategoryRepositoryIntegration:
    """Category persistence against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_posts_count_and_soft_delete(self, integration_env: AsyncContainer):
        posts = await integration_env.get(BlogPostRepository)
        categories = await integration_env.get(CategoryRepository)
        service = await integration_env.get(CategoryService)
        category = await service.create(name="Technology")
        await posts.save(make_post(category_id=category.id))
        await posts.save(make_post(published=False, category_id=category.id))

        stored = await categories.find_by_id(category.id)
        deleted = await service.delete(category.id)

        assert stored.posts_count == 1
        assert deleted is True
        assert (await categories.find_by_id(category.id)).is_active is False

    @pytest.mark.asyncio
    async def test_bulk_sort_order(self, integration_env: AsyncContainer):
        service = await integration_env.get(CategoryService)

        first = await service.create(name="First")
        second = await service.create(name="Second")

        await service.bulk_update_sort_order(
            [
                SortOrderEntry(category_id=first.id, sort_order=2),
                SortOrderEntry(category_id=second.id, sort_order=1),
            ]
        )

        page = await service.get_all()
        assert [c.id for c in page.data] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_unique_slug_constraint_is_a_conflict(
        self, integration_env: AsyncContainer
    ):
        """A slug race that slips past the pre-check still surfaces as a conflict."""
        categories = await integration_env.get(CategoryRepository)
        session = await integration_env.get(AsyncSession)
        await categories.save(make_category())

        with pytest.raises(ConflictError):
            await categories.save(make_category())

        await session.rollback()

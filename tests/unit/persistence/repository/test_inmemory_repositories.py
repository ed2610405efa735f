"""Unit tests for the in-memory repositories used by the test container."""

from datetime import timedelta
from uuid import uuid4

import pytest

from inkwell.domain.error import ConflictError
from inkwell.domain.value import (
    CommentFilter,
    CommentId,
    CommentStatus,
    PageRequest,
    SortOrder,
)
from inkwell.persistence.repository.inmemory import (
    InMemoryBlogPostRepository,
    InMemoryCategoryRepository,
    InMemoryCommentRepository,
)
from tests.factories import make_category, make_comment, make_post


class TestInMemoryCommentRepository:
    """Tests for InMemoryCommentRepository."""

    @pytest.mark.asyncio
    async def test_find_all_never_returns_inactive(self):
        # Arrange
        repo = InMemoryCommentRepository()
        post = make_post()
        active = await repo.save(make_comment(post.id))
        await repo.save(make_comment(post.id, is_active=False))

        # Act
        page = await repo.find_all(CommentFilter(), PageRequest())

        # Assert
        assert [c.id for c in page.data] == [active.id]
        assert page.pagination.total == 1

    @pytest.mark.asyncio
    async def test_find_all_pages_and_sorts(self):
        repo = InMemoryCommentRepository()
        post = make_post()
        oldest = await repo.save(make_comment(post.id, age=timedelta(days=3)))
        middle = await repo.save(make_comment(post.id, age=timedelta(days=2)))
        await repo.save(make_comment(post.id, age=timedelta(days=1)))

        page = await repo.find_all(
            CommentFilter(),
            PageRequest(page=1, limit=2, sort_by="created_at", sort_order=SortOrder.ASC),
        )

        assert [c.id for c in page.data] == [oldest.id, middle.id]
        assert page.pagination.total_pages == 2
        assert page.pagination.has_next
        assert not page.pagination.has_prev

    @pytest.mark.asyncio
    async def test_search_matches_wildcard_characters_literally(self):
        repo = InMemoryCommentRepository()
        post = make_post()
        discount = await repo.save(make_comment(post.id, "We got 50% OFF last week"))
        await repo.save(make_comment(post.id, "We got 500 off last week"))
        await repo.save(make_comment(post.id, "Snake_case is fine here"))
        await repo.save(make_comment(post.id, "Some code review here"))

        percent = await repo.search("50% off", PageRequest())
        underscore = await repo.search("e_c", PageRequest())

        assert [c.id for c in percent.data] == [discount.id]
        assert [c.content for c in underscore.data] == ["Snake_case is fine here"]

    @pytest.mark.asyncio
    async def test_set_status_counts_only_changes(self):
        repo = InMemoryCommentRepository()
        post = make_post()
        pending = await repo.save(make_comment(post.id))
        approved = await repo.save(make_comment(post.id, status=CommentStatus.APPROVED))

        changed = await repo.set_status(
            [pending.id, approved.id, CommentId(uuid4())], CommentStatus.APPROVED
        )

        assert changed == 1
        assert (await repo.find_by_id(pending.id)).status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_orphans_need_post_repository(self):
        posts = InMemoryBlogPostRepository()
        repo = InMemoryCommentRepository(posts)
        post = await posts.save(make_post())
        kept = await repo.save(make_comment(post.id))
        lost = await repo.save(make_comment(make_post().id))

        orphans = await repo.find_orphaned()

        assert [c.id for c in orphans] == [lost.id]
        assert kept.id not in [c.id for c in orphans]


class TestInMemoryCategoryRepository:
    """Tests for InMemoryCategoryRepository."""

    @pytest.mark.asyncio
    async def test_slug_is_unique_on_save(self):
        repo = InMemoryCategoryRepository()
        await repo.save(make_category())

        with pytest.raises(ConflictError):
            await repo.save(make_category())

    @pytest.mark.asyncio
    async def test_posts_count_tracks_published_posts(self):
        posts = InMemoryBlogPostRepository()
        repo = InMemoryCategoryRepository(posts)
        category = await repo.save(make_category())
        await posts.save(make_post(category_id=category.id))
        await posts.save(make_post(published=False, category_id=category.id))

        stored = await repo.find_by_id(category.id)

        assert stored.posts_count == 1
        assert await posts.count_by_category(category.id) == 2

    @pytest.mark.asyncio
    async def test_max_sort_order_of_empty_store(self):
        assert await InMemoryCategoryRepository().max_sort_order() == 0

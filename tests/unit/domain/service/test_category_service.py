"""Unit tests for CategoryService."""

from uuid import uuid4

import pytest

from inkwell.domain.error import ConflictError, NotFoundError, ValidationError
from inkwell.domain.repository import BlogPostRepository, CategoryRepository
from inkwell.domain.service import CategoryService, CategoryUpdate, generate_slug
from inkwell.domain.value import CategoryId, PageRequest, SortOrderEntry
from inkwell.domain.value.types import SLUG_PATTERN
from tests.factories import make_category, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestGenerateSlug:
    """Tests for slug derivation."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Technology", "technology"),
            ("Science & Nature", "science-nature"),
            ("  Spaced   Out  ", "spaced-out"),
            ("C++ (Advanced)", "c-advanced"),
            ("Café Olé!", "cafe-ole"),
            ("don't: panic", "dont-panic"),
        ],
    )
    def test_slug_from_name(self, name, expected):
        slug = generate_slug(name)

        assert slug == expected
        assert SLUG_PATTERN.match(slug)

    def test_symbols_only_gives_empty_slug(self):
        assert generate_slug("!!!") == ""


class TestCreate:
    """Tests for create."""

    @pytest.mark.asyncio
    async def test_first_category(self, unit_env):
        """A new category gets its slug from its name and goes first."""
        # Arrange
        service = await unit_env.get(CategoryService)

        # Act
        category = await service.create(name="Technology")

        # Assert
        assert category.slug.root == "technology"
        assert category.sort_order == 1
        assert category.is_active
        assert category.posts_count == 0

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create(name="Technology")

        with pytest.raises(ConflictError):
            await service.create(name="Technology")

    @pytest.mark.asyncio
    async def test_names_with_same_slug_conflict(self, unit_env):
        """Different names that fold to one slug still collide."""
        service = await unit_env.get(CategoryService)
        await service.create(name="Science Nature")

        with pytest.raises(ConflictError):
            await service.create(name="science, nature!")

    @pytest.mark.asyncio
    async def test_sort_order_follows_last(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create(name="Alpha", sort_order=7)

        second = await service.create(name="Beta")

        assert second.sort_order == 8

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, unit_env):
        service = await unit_env.get(CategoryService)

        category = await service.create(name="   Gardening  ")

        assert category.name == "Gardening"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "x", "y" * 51, "!!!"])
    async def test_invalid_names_rejected(self, unit_env, name):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError):
            await service.create(name=name)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("color", ["red", "#fff", "#12345g", "123456"])
    async def test_invalid_color_rejected(self, unit_env, color):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError, match="hex"):
            await service.create(name="Technology", color=color)

    @pytest.mark.asyncio
    async def test_valid_color_kept(self, unit_env):
        service = await unit_env.get(CategoryService)

        category = await service.create(name="Technology", color="#1A2b3C")

        assert category.color.root == "#1A2b3C"

    @pytest.mark.asyncio
    async def test_negative_sort_order_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError):
            await service.create(name="Technology", sort_order=-1)

    @pytest.mark.asyncio
    async def test_long_description_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError, match="Description"):
            await service.create(name="Technology", description="d" * 201)


class TestUpdate:
    """Tests for update."""

    @pytest.mark.asyncio
    async def test_rename_regenerates_slug(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        updated = await service.update(category.id, CategoryUpdate(name="Tech News"))

        assert updated.name == "Tech News"
        assert updated.slug.root == "tech-news"

    @pytest.mark.asyncio
    async def test_rename_to_taken_slug_conflicts(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create(name="Science")
        category = await service.create(name="Technology")

        with pytest.raises(ConflictError):
            await service.update(category.id, CategoryUpdate(name="Science"))

    @pytest.mark.asyncio
    async def test_same_name_does_not_conflict_with_self(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        updated = await service.update(
            category.id, CategoryUpdate(name="Technology", icon="cpu")
        )

        assert updated.slug.root == "technology"
        assert updated.icon == "cpu"

    @pytest.mark.asyncio
    async def test_unset_fields_are_left_alone(self, unit_env):
        """Only fields explicitly set on the update are applied."""
        service = await unit_env.get(CategoryService)
        category = await service.create(
            name="Technology", description="Gadgets", color="#000000"
        )

        updated = await service.update(category.id, CategoryUpdate(icon="cpu"))

        assert updated.description == "Gadgets"
        assert updated.color.root == "#000000"

    @pytest.mark.asyncio
    async def test_explicit_none_clears_description(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology", description="Gadgets")

        updated = await service.update(category.id, CategoryUpdate(description=None))

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_bad_color_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        with pytest.raises(ValidationError):
            await service.update(category.id, CategoryUpdate(color="blue"))

    @pytest.mark.asyncio
    async def test_negative_sort_order_rejected(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        with pytest.raises(ValidationError):
            await service.update(category.id, CategoryUpdate(sort_order=-3))

    @pytest.mark.asyncio
    async def test_missing_category(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(NotFoundError):
            await service.update(CategoryId(uuid4()), CategoryUpdate(name="Whatever"))


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_category_with_posts_is_deactivated(self, unit_env):
        """A category with posts is kept but no longer offered."""
        # Arrange
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        posts = await unit_env.get(BlogPostRepository)
        category = await service.create(name="Technology")
        for _ in range(3):
            await posts.save(make_post(category_id=category.id))

        # Act
        result = await service.delete(category.id)

        # Assert
        assert result is True
        stored = await repo.find_by_id(category.id)
        assert stored is not None
        assert stored.is_active is False
        assert category.id not in [c.id for c in await service.get_active()]

    @pytest.mark.asyncio
    async def test_drafts_count_as_posts(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        posts = await unit_env.get(BlogPostRepository)
        category = await service.create(name="Technology")
        await posts.save(make_post(published=False, category_id=category.id))

        await service.delete(category.id)

        assert await repo.find_by_id(category.id) is not None

    @pytest.mark.asyncio
    async def test_empty_category_is_removed(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        category = await service.create(name="Technology")

        assert await service.delete(category.id) is True

        assert await repo.find_by_id(category.id) is None

    @pytest.mark.asyncio
    async def test_missing_category_returns_false(self, unit_env):
        service = await unit_env.get(CategoryService)

        assert await service.delete(CategoryId(uuid4())) is False


class TestSortOrder:
    """Tests for single and bulk reordering."""

    @pytest.mark.asyncio
    async def test_update_sort_order(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        await service.update_sort_order(category.id, 12)

        assert (await service.get_by_id(category.id)).sort_order == 12

    @pytest.mark.asyncio
    async def test_update_sort_order_missing(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(NotFoundError):
            await service.update_sort_order(CategoryId(uuid4()), 1)

    @pytest.mark.asyncio
    async def test_bulk_reorder(self, unit_env):
        service = await unit_env.get(CategoryService)
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
    async def test_bulk_unknown_category_writes_nothing(self, unit_env):
        """One unknown id aborts the whole batch before any write."""
        # Arrange
        service = await unit_env.get(CategoryService)
        known = await service.create(name="Technology")

        # Act
        with pytest.raises(NotFoundError):
            await service.bulk_update_sort_order(
                [
                    SortOrderEntry(category_id=known.id, sort_order=9),
                    SortOrderEntry(category_id=CategoryId(uuid4()), sort_order=1),
                ]
            )

        # Assert
        assert (await service.get_by_id(known.id)).sort_order == known.sort_order

    @pytest.mark.asyncio
    async def test_bulk_negative_entry_writes_nothing(self, unit_env):
        service = await unit_env.get(CategoryService)
        a = await service.create(name="Alpha")
        b = await service.create(name="Beta")

        with pytest.raises(ValidationError):
            await service.bulk_update_sort_order(
                [
                    SortOrderEntry(category_id=a.id, sort_order=5),
                    SortOrderEntry(category_id=b.id, sort_order=-1),
                ]
            )

        assert (await service.get_by_id(a.id)).sort_order == a.sort_order

    @pytest.mark.asyncio
    async def test_bulk_rejects_empty_and_repeated(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        with pytest.raises(ValidationError):
            await service.bulk_update_sort_order([])
        with pytest.raises(ValidationError, match="only once"):
            await service.bulk_update_sort_order(
                [
                    SortOrderEntry(category_id=category.id, sort_order=1),
                    SortOrderEntry(category_id=category.id, sort_order=2),
                ]
            )


class TestQueries:
    """Tests for reads."""

    @pytest.mark.asyncio
    async def test_get_by_slug(self, unit_env):
        service = await unit_env.get(CategoryService)
        category = await service.create(name="Technology")

        assert (await service.get_by_slug("technology")).id == category.id
        assert await service.get_by_slug("unknown") is None

    @pytest.mark.asyncio
    async def test_malformed_slug_is_none(self, unit_env):
        service = await unit_env.get(CategoryService)

        assert await service.get_by_slug("Not A Slug") is None

    @pytest.mark.asyncio
    async def test_get_all_filters_and_sorts(self, unit_env):
        service = await unit_env.get(CategoryService)
        repo = await unit_env.get(CategoryRepository)
        await repo.save(make_category("Zeta", "zeta", sort_order=1))
        await repo.save(make_category("Alpha", "alpha", sort_order=2))
        await repo.save(make_category("Hidden", "hidden", sort_order=3, is_active=False))

        default = await service.get_all()
        everything = await service.get_all(is_active=None)
        retired = await service.get_all(is_active=False)
        by_name = await service.get_all(
            PageRequest(sort_by="name", sort_order="asc"), is_active=None
        )

        assert [c.name for c in default.data] == ["Zeta", "Alpha"]
        assert default.pagination.total == 2
        assert everything.pagination.total == 3
        assert [c.name for c in retired.data] == ["Hidden"]
        assert [c.name for c in by_name.data] == ["Alpha", "Hidden", "Zeta"]

    @pytest.mark.asyncio
    async def test_soft_deleted_category_is_hidden_from_lookups(self, unit_env):
        """A category deactivated because it still has posts is not found."""
        # Arrange
        service = await unit_env.get(CategoryService)
        posts = await unit_env.get(BlogPostRepository)
        category = await service.create(name="Technology")
        await posts.save(make_post(category_id=category.id))

        # Act
        await service.delete(category.id)

        # Assert
        assert await service.get_by_id(category.id) is None
        assert await service.get_by_slug("technology") is None
        assert (await service.get_all()).data == []
        hidden = await service.get_by_id(category.id, include_inactive=True)
        assert hidden.is_active is False
        by_slug = await service.get_by_slug("technology", include_inactive=True)
        assert by_slug.id == category.id

    @pytest.mark.asyncio
    async def test_get_all_rejects_unknown_sort_field(self, unit_env):
        service = await unit_env.get(CategoryService)

        with pytest.raises(ValidationError):
            await service.get_all(PageRequest(sort_by="posts_count"))

    @pytest.mark.asyncio
    async def test_popular_orders_by_published_posts(self, unit_env):
        """Ties on post count fall back to sort order."""
        # Arrange
        service = await unit_env.get(CategoryService)
        posts = await unit_env.get(BlogPostRepository)
        quiet = await service.create(name="Quiet", sort_order=1)
        busy = await service.create(name="Busy", sort_order=5)
        also_quiet = await service.create(name="Also Quiet", sort_order=0)
        for _ in range(2):
            await posts.save(make_post(category_id=busy.id))
        await posts.save(make_post(published=False, category_id=quiet.id))

        # Act
        popular = await service.get_popular(10)

        # Assert
        assert [c.id for c in popular] == [busy.id, also_quiet.id, quiet.id]
        assert popular[0].posts_count == 2

    @pytest.mark.asyncio
    async def test_popular_limit_is_clamped(self, unit_env):
        service = await unit_env.get(CategoryService)
        await service.create(name="Alpha")
        await service.create(name="Beta")

        assert len(await service.get_popular(0)) == 1
        assert len(await service.get_popular(500)) == 2

    @pytest.mark.asyncio
    async def test_stats_and_counts(self, unit_env):
        service = await unit_env.get(CategoryService)
        posts = await unit_env.get(BlogPostRepository)
        live = await service.create(name="Live")
        retired = await service.create(name="Retired")
        await posts.save(make_post(category_id=retired.id))
        await service.delete(retired.id)
        await posts.save(make_post(category_id=live.id))

        counts = await service.get_categories_count()
        stats = {s.category_id: s for s in await service.get_category_stats()}

        assert (counts.total, counts.active, counts.inactive) == (2, 1, 1)
        assert stats[live.id].posts_count == 1
        assert stats[live.id].is_available_for_posts
        assert not stats[retired.id].is_active
        assert not stats[retired.id].is_available_for_posts

"""Category domain service."""

import re
import unicodedata
from typing import Optional, Sequence
from uuid import uuid4

import logfire
from pydantic import BaseModel

from inkwell.config import CategorySettings, PaginationSettings
from inkwell.domain.error import (
    ConflictError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from inkwell.domain.model import Category
from inkwell.domain.model.common import utcnow
from inkwell.domain.repository import BlogPostRepository, CategoryRepository
from inkwell.domain.value import (
    CategoryCounts,
    CategoryId,
    CategoryPostStats,
    HexColor,
    Page,
    PageRequest,
    Slug,
    SortOrder,
    SortOrderEntry,
)
from inkwell.domain.value.types import HEX_COLOR_PATTERN, SLUG_PATTERN

from .base import Service

CATEGORY_SORT_FIELDS = frozenset({"sort_order", "name", "created_at", "updated_at"})

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200
ICON_MAX_LENGTH = 50

_STRIP_CHARS_RE = re.compile(r"[*+~.()'\"!:@]")
_SEPARATOR_RE = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """Derive a category slug from its name.

    - Folds accents to ASCII and lowercases
    - Drops ``*+~.()'"!:@``
    - Joins the remaining words with single hyphens

    Returns:
        Slug string (empty if the name has no usable characters)
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    slug = _STRIP_CHARS_RE.sub("", ascii_name.lower())
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")[:100]


class CategoryUpdate(BaseModel):
    """Partial category update.

    Only fields explicitly set are applied; setting ``description``,
    ``color`` or ``icon`` to None clears them.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class CategoryService(Service):
    """Domain service for category integrity rules.

    Owns slug derivation and uniqueness, color and sort-order validation,
    and the soft/hard delete decision.
    """

    def __init__(
        self,
        category_repository: CategoryRepository,
        blog_post_repository: BlogPostRepository,
        category_settings: CategorySettings,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            blog_post_repository: Blog post repository (post counts)
            category_settings: Batch and ranking caps
            pagination_settings: Default and maximum page sizes
        """
        self.category_repository = category_repository
        self.blog_post_repository = blog_post_repository
        self.settings = category_settings
        self.pagination = pagination_settings

    async def create(
        self,
        name: str,
        description: str | None = None,
        color: str | None = None,
        icon: str | None = None,
        sort_order: int | None = None,
    ) -> Category:
        """Create a category with a slug derived from its name.

        When ``sort_order`` is omitted the category goes after the last one.

        Raises:
            ValidationError: If name, color, description, icon or sort order
                is invalid
            ConflictError: If the derived slug is already taken
        """
        with logfire.span("category_service.create", name=name):
            name = self._validate_name(name)
            slug = self._make_slug(name)
            hex_color = self._validate_color(color)
            self._validate_text("Description", description, DESCRIPTION_MAX_LENGTH)
            self._validate_text("Icon", icon, ICON_MAX_LENGTH)

            if await self.category_repository.find_by_slug(slug):
                logfire.warn("Category slug already exists", slug=slug.root)
                raise ConflictError("Category", "slug", slug.root)

            if sort_order is None:
                sort_order = await self.category_repository.max_sort_order() + 1
            self._validate_sort_order(sort_order)

            now = utcnow()
            saved = await self.category_repository.save(
                Category(
                    id=CategoryId(uuid4()),
                    name=name,
                    slug=slug,
                    description=description,
                    color=hex_color,
                    icon=icon,
                    is_active=True,
                    sort_order=sort_order,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info(
                "Category created",
                category_id=str(saved.id),
                slug=saved.slug.root,
                sort_order=saved.sort_order,
            )
            return saved

    async def update(self, category_id: CategoryId, changes: CategoryUpdate) -> Category:
        """Apply a partial update.

        A new name regenerates the slug, which must not collide with any
        other category.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If the new slug is taken by another category
            ValidationError: If a changed field is invalid
        """
        with logfire.span(
            "category_service.update",
            category_id=str(category_id),
            fields=sorted(changes.model_fields_set),
        ):
            category = await self.category_repository.find_by_id(category_id)
            if category is None:
                raise NotFoundError("Category", str(category_id))

            fields = changes.model_fields_set
            updates: dict = {}

            if "name" in fields:
                if changes.name is None:
                    raise ValidationError("Category name cannot be empty")
                name = self._validate_name(changes.name)
                if name != category.name:
                    slug = self._make_slug(name)
                    existing = await self.category_repository.find_by_slug(slug)
                    if existing and existing.id != category.id:
                        logfire.warn(
                            "Category slug already exists",
                            slug=slug.root,
                            category_id=str(category_id),
                        )
                        raise ConflictError("Category", "slug", slug.root)
                    updates["name"] = name
                    updates["slug"] = slug

            if "description" in fields:
                self._validate_text(
                    "Description", changes.description, DESCRIPTION_MAX_LENGTH
                )
                updates["description"] = changes.description

            if "color" in fields:
                updates["color"] = self._validate_color(changes.color)

            if "icon" in fields:
                self._validate_text("Icon", changes.icon, ICON_MAX_LENGTH)
                updates["icon"] = changes.icon

            if "is_active" in fields and changes.is_active is not None:
                updates["is_active"] = changes.is_active

            if "sort_order" in fields and changes.sort_order is not None:
                self._validate_sort_order(changes.sort_order)
                updates["sort_order"] = changes.sort_order

            if not updates:
                return category

            updates["updated_at"] = utcnow()
            saved = await self.category_repository.save(
                category.model_copy(update=updates)
            )
            logfire.info(
                "Category updated",
                category_id=str(category_id),
                fields=sorted(updates),
            )
            return saved

    async def delete(self, category_id: CategoryId) -> bool:
        """Delete a category.

        Categories that still have posts are deactivated; empty ones are
        removed.

        Returns:
            True on success, False if missing or the datastore failed
        """
        with logfire.span("category_service.delete", category_id=str(category_id)):
            try:
                category = await self.category_repository.find_by_id(category_id)
                if category is None:
                    logfire.warn("Category not found", category_id=str(category_id))
                    return False

                posts = await self.blog_post_repository.count_by_category(category_id)
                if posts > 0:
                    await self.category_repository.save(
                        category.model_copy(
                            update={"is_active": False, "updated_at": utcnow()}
                        )
                    )
                    logfire.info(
                        "Category soft-deleted",
                        category_id=str(category_id),
                        posts=posts,
                    )
                    return True

                removed = await self.category_repository.delete(category_id)
                logfire.info(
                    "Category hard-deleted",
                    category_id=str(category_id),
                    removed=removed,
                )
                return removed
            except RepositoryError as e:
                logfire.error(
                    "Category delete failed",
                    category_id=str(category_id),
                    error=str(e),
                )
                return False

    async def update_sort_order(self, category_id: CategoryId, sort_order: int) -> None:
        """Set one category's sort order.

        Raises:
            ValidationError: If sort order is negative
            NotFoundError: If the category does not exist
        """
        with logfire.span(
            "category_service.update_sort_order",
            category_id=str(category_id),
            sort_order=sort_order,
        ):
            self._validate_sort_order(sort_order)
            updated = await self.category_repository.update_sort_order(
                category_id, sort_order
            )
            if not updated:
                raise NotFoundError("Category", str(category_id))
            logfire.info(
                "Category sort order updated",
                category_id=str(category_id),
                sort_order=sort_order,
            )

    async def bulk_update_sort_order(self, entries: Sequence[SortOrderEntry]) -> None:
        """Reorder several categories.

        Every entry is validated and every category checked for existence
        before anything is written.

        Raises:
            ValidationError: If the batch is empty, too large, repeats a
                category or holds a negative sort order
            NotFoundError: If any referenced category does not exist
        """
        with logfire.span("category_service.bulk_update_sort_order", count=len(entries)):
            if not entries:
                raise ValidationError("At least one sort order entry is required")
            if len(entries) > self.settings.max_bulk_sort_entries:
                raise ValidationError(
                    f"Cannot reorder more than {self.settings.max_bulk_sort_entries} "
                    "categories at once"
                )

            ids = [e.category_id for e in entries]
            if len(set(ids)) != len(ids):
                raise ValidationError("Each category can appear only once")
            for entry in entries:
                self._validate_sort_order(entry.sort_order)

            found = {c.id for c in await self.category_repository.find_by_ids(ids)}
            missing = [str(i) for i in ids if i not in found]
            if missing:
                logfire.warn("Bulk reorder references unknown categories", missing=missing)
                raise NotFoundError("Category", ", ".join(missing))

            updated = await self.category_repository.update_sort_orders(entries)
            logfire.info("Category sort orders updated", count=updated)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_id(
        self, category_id: CategoryId, include_inactive: bool = False
    ) -> Category | None:
        """Get a category by ID.

        Returns None if the category is missing, soft-deleted (unless
        ``include_inactive``) or the datastore fails.
        """
        with logfire.span("category_service.get_by_id", category_id=str(category_id)):
            try:
                category = await self.category_repository.find_by_id(category_id)
            except RepositoryError as e:
                logfire.error(
                    "Category lookup failed",
                    category_id=str(category_id),
                    error=str(e),
                )
                return None
            return self._visible(category, include_inactive)

    async def get_by_slug(
        self, slug: str, include_inactive: bool = False
    ) -> Category | None:
        """Get a category by slug.

        Returns None for malformed or unknown slugs, and for soft-deleted
        categories unless ``include_inactive``.
        """
        with logfire.span("category_service.get_by_slug", slug=slug):
            if not SLUG_PATTERN.match(slug) or len(slug) > 100:
                return None
            category = await self.category_repository.find_by_slug(Slug(slug))
            return self._visible(category, include_inactive)

    async def get_all(
        self, page: PageRequest | None = None, is_active: bool | None = True
    ) -> Page[Category]:
        """List categories, by sort order ascending unless asked otherwise.

        Only active categories by default. Pass ``is_active=None`` for all of
        them or ``False`` for the soft-deleted ones.
        """
        with logfire.span("category_service.get_all", is_active=is_active):
            return await self.category_repository.find_all(
                self._page_request(page), is_active=is_active
            )

    async def get_active(self) -> list[Category]:
        """Categories that can currently receive posts ([] on datastore failure)."""
        with logfire.span("category_service.get_active"):
            try:
                categories = await self.category_repository.find_active()
            except RepositoryError as e:
                logfire.error("Active category lookup failed", error=str(e))
                return []
            return [c for c in categories if c.is_available_for_posts]

    async def get_popular(self, limit: int = 10) -> list[Category]:
        """Active categories with the most published posts.

        ``limit`` is clamped to [1, popular_limit_max].
        """
        limit = max(1, min(limit, self.settings.popular_limit_max))
        with logfire.span("category_service.get_popular", limit=limit):
            return await self.category_repository.find_popular(limit)

    async def get_category_stats(self) -> list[CategoryPostStats]:
        """Per-category post counts and availability."""
        with logfire.span("category_service.get_category_stats"):
            categories = await self.category_repository.find_with_post_count()
            return [
                CategoryPostStats(
                    category_id=c.id,
                    name=c.name,
                    slug=c.slug,
                    posts_count=c.posts_count,
                    is_active=c.is_active,
                    is_available_for_posts=c.is_available_for_posts,
                )
                for c in categories
            ]

    async def get_categories_count(self) -> CategoryCounts:
        """Total, active and inactive category counts."""
        with logfire.span("category_service.get_categories_count"):
            return await self.category_repository.get_category_counts()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _visible(category: Category | None, include_inactive: bool) -> Category | None:
        if category is None or (not category.is_active and not include_inactive):
            return None
        return category

    @staticmethod
    def _validate_name(name: str) -> str:
        name = name.strip()
        if len(name) < NAME_MIN_LENGTH:
            raise ValidationError(
                f"Category name must be at least {NAME_MIN_LENGTH} characters"
            )
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(
                f"Category name cannot exceed {NAME_MAX_LENGTH} characters"
            )
        return name

    @staticmethod
    def _make_slug(name: str) -> Slug:
        slug = generate_slug(name)
        if not SLUG_PATTERN.match(slug):
            raise ValidationError(
                f"Category name '{name}' does not produce a valid slug"
            )
        return Slug(slug)

    @staticmethod
    def _validate_color(color: str | None) -> HexColor | None:
        if color is None:
            return None
        if not HEX_COLOR_PATTERN.match(color):
            raise ValidationError("Color must be a hex code in the form #RRGGBB")
        return HexColor(color)

    @staticmethod
    def _validate_text(label: str, value: str | None, max_length: int) -> None:
        if value is not None and len(value) > max_length:
            raise ValidationError(f"{label} cannot exceed {max_length} characters")

    @staticmethod
    def _validate_sort_order(sort_order: int) -> None:
        if isinstance(sort_order, bool) or not isinstance(sort_order, int):
            raise ValidationError("Sort order must be an integer")
        if sort_order < 0:
            raise ValidationError("Sort order must be non-negative")

    def _page_request(self, page: PageRequest | None) -> PageRequest:
        if page is None:
            return PageRequest(
                limit=self.pagination.category_default_limit,
                sort_by="sort_order",
                sort_order=SortOrder.ASC,
            )
        if page.sort_by is not None and page.sort_by not in CATEGORY_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort categories by '{page.sort_by}'; "
                f"allowed: {', '.join(sorted(CATEGORY_SORT_FIELDS))}"
            )
        return page.model_copy(
            update={
                "limit": min(page.limit, self.pagination.category_max_limit),
                "sort_by": page.sort_by or "sort_order",
            }
        )

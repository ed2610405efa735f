"""Domain value objects for Inkwell.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from inkwell.domain.value.common import RootValueObject

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class CommentStatus(str, Enum):
    """Moderation status of a comment.

    PENDING is the only initial state. APPROVED and REJECTED can be
    switched into each other by an explicit moderator action.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PostStatus(str, Enum):
    """Publication status of a blog post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class SortOrder(str, Enum):
    """Sort direction for paginated queries."""

    ASC = "asc"
    DESC = "desc"


class Slug(RootValueObject[str]):
    """URL-safe slug for categories and posts.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'technology', 'science-and-nature'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not SLUG_PATTERN.match(v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class HexColor(RootValueObject[str]):
    """Color in ``#RRGGBB`` form."""

    @field_validator("root")
    @classmethod
    def validate_color_format(cls, v: str) -> str:
        """Validate hex color format."""
        if not HEX_COLOR_PATTERN.match(v):
            raise ValueError("Color must be a hex code in the form #RRGGBB")
        return v

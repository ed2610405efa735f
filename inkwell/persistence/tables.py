"""SQLAlchemy table definitions for Inkwell.

They match the schema defined in Alembic migrations. Rows are mapped to
domain models by hand in ``mappers``.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

comment_status_enum = postgresql.ENUM(
    "pending", "approved", "rejected", name="comment_status", create_type=False
)
post_status_enum = postgresql.ENUM(
    "draft", "published", "archived", name="post_status", create_type=False
)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(50), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("description", String(200), nullable=True),
    Column("color", String(7), nullable=True),  # #RRGGBB
    Column("icon", String(50), nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("sort_order", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("slug", name="uq_categories_slug"),
    CheckConstraint(
        "slug ~ '^[a-z0-9]+(-[a-z0-9]+)*$'", name="categories_slug_format"
    ),
    CheckConstraint(
        "color IS NULL OR color ~ '^#[0-9a-fA-F]{6}$'", name="categories_color_format"
    ),
    CheckConstraint("sort_order >= 0", name="categories_sort_order_non_negative"),
)

Index("idx_categories_is_active", categories_table.c.is_active)
Index("idx_categories_sort_order", categories_table.c.sort_order)

# ============================================================================
# BLOG POSTS TABLE (owned elsewhere, referenced here)
# ============================================================================
blog_posts_table = Table(
    "blog_posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("title", String(300), nullable=False),
    Column("slug", String(100), nullable=False, unique=True),
    Column("author_id", UUID, nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("status", post_status_enum, nullable=False, server_default="draft"),
    Column("is_published", Boolean, nullable=False, server_default="false"),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_blog_posts_category_id", blog_posts_table.c.category_id)
Index("idx_blog_posts_author_id", blog_posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "blog_post_id",
        UUID,
        ForeignKey("blog_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("author_id", UUID, nullable=False),
    # No FK: replies outlive a hard-deleted parent as inactive rows
    Column("parent_id", UUID, nullable=True),
    Column("content", Text, nullable=False),
    Column("status", comment_status_enum, nullable=False, server_default="pending"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(content) > 0", name="comments_content_not_empty"),
)

Index("idx_comments_blog_post_id", comments_table.c.blog_post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_status_active", comments_table.c.status, comments_table.c.is_active)
Index("idx_comments_created_at", comments_table.c.created_at)

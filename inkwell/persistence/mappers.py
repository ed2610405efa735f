"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from inkwell.domain.model import BlogPost, Category, Comment
from inkwell.domain.value import (
    BlogPostId,
    CategoryId,
    CommentId,
    CommentStatus,
    HexColor,
    PostStatus,
    Slug,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        blog_post_id=BlogPostId(_uuid(row["blog_post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        content=row["content"],
        status=CommentStatus(row["status"]),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": comment.id,
        "blog_post_id": comment.blog_post_id,
        "author_id": comment.author_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
        "status": comment.status.value,
        "is_active": comment.is_active,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row (optionally with a posts_count column) to Category."""
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        color=HexColor(row["color"]) if row.get("color") else None,
        icon=row.get("icon"),
        is_active=row["is_active"],
        sort_order=row["sort_order"],
        posts_count=row.get("posts_count") or 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category to database dict. ``posts_count`` is derived, not stored."""
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug.root,
        "description": category.description,
        "color": category.color.root if category.color else None,
        "icon": category.icon,
        "is_active": category.is_active,
        "sort_order": category.sort_order,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def row_to_blog_post(row: Dict[str, Any]) -> BlogPost:
    """Convert database row to BlogPost domain model."""
    return BlogPost(
        id=BlogPostId(_uuid(row["id"])),
        title=row["title"],
        slug=Slug(row["slug"]),
        author_id=UserId(_uuid(row["author_id"])),
        category_id=CategoryId(_uuid(row["category_id"]))
        if row.get("category_id")
        else None,
        status=PostStatus(row["status"]),
        is_published=row["is_published"],
        published_at=row.get("published_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def blog_post_to_dict(blog_post: BlogPost) -> Dict[str, Any]:
    """Convert BlogPost domain model to database dict."""
    return {
        "id": blog_post.id,
        "title": blog_post.title,
        "slug": blog_post.slug.root,
        "author_id": blog_post.author_id,
        "category_id": blog_post.category_id,
        "status": blog_post.status.value,
        "is_published": blog_post.is_published,
        "published_at": blog_post.published_at,
        "created_at": blog_post.created_at,
        "updated_at": blog_post.updated_at,
    }

"""Builders for domain objects used across tests."""

from datetime import timedelta
from uuid import uuid4

from inkwell.config import AuthSettings
from inkwell.domain.model import BlogPost, Category, Comment
from inkwell.domain.model.common import utcnow
from inkwell.domain.value import (
    BlogPostId,
    CategoryId,
    CommentId,
    CommentStatus,
    PostStatus,
    Slug,
    UserId,
)
from inkwell.util.jwt import create_token


def make_post(
    published: bool = True,
    category_id: CategoryId | None = None,
    title: str = "Test post",
) -> BlogPost:
    """Build a blog post, published by default."""
    post_id = BlogPostId(uuid4())
    return BlogPost(
        id=post_id,
        title=title,
        slug=Slug(f"post-{str(post_id)[:8]}"),
        author_id=UserId(uuid4()),
        category_id=category_id,
        status=PostStatus.PUBLISHED if published else PostStatus.DRAFT,
        is_published=published,
        published_at=utcnow() if published else None,
    )

def make_comment(
    blog_post_id: BlogPostId,
    content: str = "A perfectly reasonable comment",
    status: CommentStatus = CommentStatus.PENDING,
    parent_id: CommentId | None = None,
    author_id: UserId | None = None,
    is_active: bool = True,
    age: timedelta = timedelta(0),
) -> Comment:
    """Build a comment directly, bypassing service validation."""
    created = utcnow() - age
    return Comment(
        id=CommentId(uuid4()),
        blog_post_id=blog_post_id,
        author_id=author_id or UserId(uuid4()),
        content=content,
        parent_id=parent_id,
        status=status,
        is_active=is_active,
        created_at=created,
        updated_at=created,
    )

def make_category(
    name: str = "Technology",
    slug: str = "technology",
    sort_order: int = 0,
    is_active: bool = True,
) -> Category:
    """Build a category directly, bypassing service validation."""
    return Category(
        id=CategoryId(uuid4()),
        name=name,
        slug=Slug(slug),
        is_active=is_active,
        sort_order=sort_order,
    )


def auth_cookie(role: str = "user", user_id: str | None = None) -> dict[str, str]:
    """Cookie for a signed-in user with the given role."""
    token = create_token(user_id or str(uuid4()), role, AuthSettings())
    return {"auth_token": token}

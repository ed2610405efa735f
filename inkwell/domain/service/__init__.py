"""Domain services."""

from .base import Service
from .category_service import CategoryService, CategoryUpdate, generate_slug
from .comment_service import CommentService
from .jwt_service import JWTService
from .spam import HeuristicSpamDetector, SpamDetector, sanitize_content

__all__ = [
    "CategoryService",
    "CategoryUpdate",
    "CommentService",
    "HeuristicSpamDetector",
    "JWTService",
    "Service",
    "SpamDetector",
    "generate_slug",
    "sanitize_content",
]

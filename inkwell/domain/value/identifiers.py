"""Strongly typed identifiers for Inkwell domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
CategoryId = NewType("CategoryId", UUID)
BlogPostId = NewType("BlogPostId", UUID)
UserId = NewType("UserId", UUID)

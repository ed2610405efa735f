"""Mock persistence providers for testing."""

from dishka import Scope, provide

from inkwell.domain.repository import (
    BlogPostRepository,
    CategoryRepository,
    CommentRepository,
)
from inkwell.persistence.repository.inmemory import (
    InMemoryBlogPostRepository,
    InMemoryCategoryRepository,
    InMemoryCommentRepository,
)
from inkwell.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope so that state survives across requests of one container
    (API tests issue several requests). Each test builds its own container,
    which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_blog_post_repository(self) -> BlogPostRepository:
        """Provide in-memory blog post repository."""
        return InMemoryBlogPostRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, blog_post_repository: BlogPostRepository
    ) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(blog_post_repository)

    @provide(scope=Scope.APP)
    def get_category_repository(
        self, blog_post_repository: BlogPostRepository
    ) -> CategoryRepository:
        """Provide in-memory category repository."""
        return InMemoryCategoryRepository(blog_post_repository)

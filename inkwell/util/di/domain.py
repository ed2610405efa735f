"""Domain layer DI providers."""

from dishka import Scope, provide

from inkwell.config import (
    AuthSettings,
    CategorySettings,
    ModerationSettings,
    PaginationSettings,
)
from inkwell.domain.repository import (
    BlogPostRepository,
    CategoryRepository,
    CommentRepository,
)
from inkwell.domain.service import (
    CategoryService,
    CommentService,
    HeuristicSpamDetector,
    JWTService,
    SpamDetector,
)
from inkwell.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_spam_detector(self) -> SpamDetector:
        """Provide the spam scoring policy."""
        return HeuristicSpamDetector()

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        blog_post_repository: BlogPostRepository,
        moderation_settings: ModerationSettings,
        pagination_settings: PaginationSettings,
        spam_detector: SpamDetector,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            blog_post_repository=blog_post_repository,
            moderation_settings=moderation_settings,
            pagination_settings=pagination_settings,
            spam_detector=spam_detector,
        )

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        blog_post_repository: BlogPostRepository,
        category_settings: CategorySettings,
        pagination_settings: PaginationSettings,
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository,
            blog_post_repository=blog_post_repository,
            category_settings=category_settings,
            pagination_settings=pagination_settings,
        )

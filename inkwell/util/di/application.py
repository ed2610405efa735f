"""Application layer DI providers."""

from dishka import Scope, provide

from inkwell.application.usecase.category import (
    BulkUpdateCategorySortOrderUseCase,
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryStatsUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategorySortOrderUseCase,
    UpdateCategoryUseCase,
)
from inkwell.application.usecase.comment import (
    BulkModerateCommentsUseCase,
    CleanupRejectedCommentsUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentAnalyticsUseCase,
    GetCommentUseCase,
    GetOrphanedCommentsUseCase,
    GetPostCommentsUseCase,
    ListCommentsUseCase,
    ModerateCommentUseCase,
    UpdateCommentUseCase,
)
from inkwell.domain.service import CategoryService, CommentService
from inkwell.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        return ModerateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_moderate_comments_use_case(
        self, comment_service: CommentService
    ) -> BulkModerateCommentsUseCase:
        return BulkModerateCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_comments_use_case(
        self, comment_service: CommentService
    ) -> GetPostCommentsUseCase:
        return GetPostCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        return ListCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_analytics_use_case(
        self, comment_service: CommentService
    ) -> GetCommentAnalyticsUseCase:
        return GetCommentAnalyticsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_cleanup_rejected_comments_use_case(
        self, comment_service: CommentService
    ) -> CleanupRejectedCommentsUseCase:
        return CleanupRejectedCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_orphaned_comments_use_case(
        self, comment_service: CommentService
    ) -> GetOrphanedCommentsUseCase:
        return GetOrphanedCommentsUseCase(comment_service=comment_service)

    # Category use cases
    @provide(scope=Scope.REQUEST)
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        return CreateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_update_category_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategoryUseCase:
        return UpdateCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_category_use_case(
        self, category_service: CategoryService
    ) -> DeleteCategoryUseCase:
        return DeleteCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_get_category_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryUseCase:
        return GetCategoryUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_list_categories_use_case(
        self, category_service: CategoryService
    ) -> ListCategoriesUseCase:
        return ListCategoriesUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_update_category_sort_order_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategorySortOrderUseCase:
        return UpdateCategorySortOrderUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_update_category_sort_order_use_case(
        self, category_service: CategoryService
    ) -> BulkUpdateCategorySortOrderUseCase:
        return BulkUpdateCategorySortOrderUseCase(category_service=category_service)

    @provide(scope=Scope.REQUEST)
    def get_get_category_stats_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryStatsUseCase:
        return GetCategoryStatsUseCase(category_service=category_service)

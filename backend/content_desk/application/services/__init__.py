from .article_lifecycle_service import ArticleLifecycleService
from .article_query_service import ArticlePage, ArticleQueryService
from .comment_thread_service import (
    CommentPage,
    CommentThreadService,
    FlatCommentPage,
    drain_notifications,
)
from .comment_settings_service import NOT_MODIFIED, CommentSettingsService
from .comment_stats_service import CommentStatsService
from .stats_aggregator import CommentStatsAggregator, RollupReport, UserRollupOutcome
from .stats_scheduler import CommentStatsScheduler

__all__ = [
    "ArticleLifecycleService",
    "ArticlePage",
    "ArticleQueryService",
    "CommentPage",
    "CommentThreadService",
    "FlatCommentPage",
    "drain_notifications",
    "NOT_MODIFIED",
    "CommentSettingsService",
    "CommentStatsService",
    "CommentStatsAggregator",
    "RollupReport",
    "UserRollupOutcome",
    "CommentStatsScheduler",
]

from .user import Actor, AuthorSnapshot, UserAccount
from .taxonomy import Category, Theme
from .article import (
    Article,
    ArticleListFilter,
    ArticleState,
    ArticleView,
    BULK_ORIGIN_STATES,
    ImageKind,
    SINGLE_TRANSITION_TARGETS,
)
from .comment import ArticleSummary, Comment, CommentView, ReadPartition
from .comment_settings import CommentListType, CommentSettings, SortOrder
from .stat_record import StatRecord

__all__ = [
    "Actor",
    "AuthorSnapshot",
    "UserAccount",
    "Category",
    "Theme",
    "Article",
    "ArticleListFilter",
    "ArticleState",
    "ArticleView",
    "BULK_ORIGIN_STATES",
    "ImageKind",
    "SINGLE_TRANSITION_TARGETS",
    "ArticleSummary",
    "Comment",
    "CommentView",
    "ReadPartition",
    "CommentListType",
    "CommentSettings",
    "SortOrder",
    "StatRecord",
]

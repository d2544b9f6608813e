from .article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleStatesChange,
    ArticleStatesChangeResult,
    ArticleUpdate,
    ExistingArticlesResponse,
    ImageResponse,
    TitleLookup,
)
from .comment import (
    AnswerCreate,
    AnswerListResponse,
    ArticleCommentsResponse,
    CommentListResponse,
    CommentResponse,
    CommentViewResponse,
)
from .comment_settings import CommentSettingsResponse, CommentSettingsUpdate
from .stats import CommentStatsResponse, StatRecordResponse
from .errors import ErrorResponse

__all__ = [
    "ArticleCreate",
    "ArticleListResponse",
    "ArticleResponse",
    "ArticleStatesChange",
    "ArticleStatesChangeResult",
    "ArticleUpdate",
    "ExistingArticlesResponse",
    "ImageResponse",
    "TitleLookup",
    "AnswerCreate",
    "AnswerListResponse",
    "ArticleCommentsResponse",
    "CommentListResponse",
    "CommentResponse",
    "CommentViewResponse",
    "CommentSettingsResponse",
    "CommentSettingsUpdate",
    "CommentStatsResponse",
    "StatRecordResponse",
    "ErrorResponse",
]

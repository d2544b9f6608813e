from .article_repository import SQLAlchemyArticleRepository
from .taxonomy_repository import SQLAlchemyTaxonomyRepository
from .user_repository import SQLAlchemyUserRepository
from .comment_repository import SQLAlchemyCommentRepository
from .comment_settings_repository import SQLAlchemyCommentSettingsRepository
from .stat_record_repository import SQLAlchemyStatRecordRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyTaxonomyRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyCommentRepository",
    "SQLAlchemyCommentSettingsRepository",
    "SQLAlchemyStatRecordRepository",
]

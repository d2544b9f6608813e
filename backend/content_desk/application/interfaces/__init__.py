from .article_repository import ArticleRepository
from .taxonomy_repository import TaxonomyRepository
from .user_repository import UserRepository
from .comment_repository import CommentRepository
from .comment_settings_repository import CommentSettingsRepository
from .stat_record_repository import StatRecordRepository
from .object_storage import ObjectStorage
from .notification_dispatcher import NotificationDispatcher

__all__ = [
    "ArticleRepository",
    "TaxonomyRepository",
    "UserRepository",
    "CommentRepository",
    "CommentSettingsRepository",
    "StatRecordRepository",
    "ObjectStorage",
    "NotificationDispatcher",
]

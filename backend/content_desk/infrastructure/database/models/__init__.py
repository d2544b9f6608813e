from .user import UserModel
from .taxonomy import CategoryModel, ThemeModel
from .article import ArticleModel
from .comment import CommentModel
from .comment_settings import CommentSettingsModel
from .stat_record import CommentStatModel

__all__ = [
    "UserModel",
    "ThemeModel",
    "CategoryModel",
    "ArticleModel",
    "CommentModel",
    "CommentSettingsModel",
    "CommentStatModel",
]

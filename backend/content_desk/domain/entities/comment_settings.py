"""Per-user comment display and notification preferences."""

from dataclasses import dataclass
from enum import Enum


class CommentListType(str, Enum):
    ALL = "all"
    NOT_READED = "not-readed"
    ONLY_READED = "only-readed"
    DISABLED = "disabled"
    ENABLED = "enabled"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class CommentSettings:
    """Stored settings row. ``notify`` is kept raw (see the merge quirk)."""

    user_id: str
    type: str | None = None
    order: str | None = None
    answers_type: str | None = None
    answers_order: str | None = None
    limit: int | None = None
    notify: int | bool | None = None
    ttl: int | None = None  # epoch milliseconds, never persisted

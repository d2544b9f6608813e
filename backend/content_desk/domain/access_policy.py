"""Authorization predicates for articles.

Pure functions over an :class:`Actor` and the article being touched; callers
decide which error to raise when a predicate fails.
"""

from content_desk.domain.entities import Actor, Article


def is_owner(actor: Actor, article: Article) -> bool:
    return actor.id == article.user_id


def can_mutate_article(actor: Actor, article: Article) -> bool:
    return actor.is_admin or is_owner(actor, article)


def can_view_article(actor: Actor, article: Article) -> bool:
    return actor.is_admin or is_owner(actor, article)


def boost_quota_exceeded(actor: Actor, current_boosted: int) -> bool:
    """Single-article path: refused once a non-admin author already holds two boosted articles."""
    if actor.is_admin or not actor.is_author:
        return False
    return current_boosted > 1


def bulk_boost_quota_exceeded(actor: Actor, current_boosted: int, requested: int) -> bool:
    """Bulk path: non-admins may boost exactly one article and only when none is boosted."""
    if actor.is_admin:
        return False
    return current_boosted >= 1 or requested > 1

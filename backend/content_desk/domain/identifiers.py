"""Identifier helpers shared by every entity."""

from uuid import UUID, uuid4


def new_id() -> str:
    return str(uuid4())


def is_valid_id(value: object) -> bool:
    """True when ``value`` is a canonical UUID string."""
    if not isinstance(value, str):
        return False
    try:
        return str(UUID(value)) == value.lower()
    except ValueError:
        return False


def default_custom_uri() -> str:
    """Generate a throwaway vanity path for articles without a chosen one."""
    return uuid4().hex

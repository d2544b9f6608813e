"""Reference data used to classify articles."""

from dataclasses import dataclass

ACTIVE = "active"


@dataclass
class Theme:
    id: str
    name: str
    state: str = ACTIVE
    description: str | None = None

    @property
    def is_active(self) -> bool:
        return self.state == ACTIVE


@dataclass
class Category:
    """A category always belongs to exactly one theme."""

    id: str
    name: str
    theme_id: str
    state: str = ACTIVE
    description: str | None = None

    @property
    def is_active(self) -> bool:
        return self.state == ACTIVE

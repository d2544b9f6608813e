"""Time-bucketed comment statistics."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class StatRecord:
    """One rollup row. ``reference`` is a user id, or None for the platform."""

    month: int
    year: int
    count: int
    reference: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

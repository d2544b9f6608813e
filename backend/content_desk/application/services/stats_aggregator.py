"""Monthly comment-volume rollup.

Counts root comments per author and platform-wide for the current month and
appends one StatRecord per author plus one platform row. Rows are never
updated, so running twice in a period stores the period twice; scheduling is
what keeps the series clean.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from content_desk.application.interfaces import (
    CommentRepository,
    StatRecordRepository,
    UserRepository,
)
from content_desk.domain.entities import StatRecord

logger = logging.getLogger(__name__)


def month_window(now: datetime) -> tuple[datetime, datetime]:
    """``[day 1, day 31)`` of ``now``'s month, where day 31 overflows like a calendar date.

    Short months therefore include the first days of the following month,
    and 31-day months stop before the 31st.
    """
    start = datetime(now.year, now.month, 1, tzinfo=timezone.utc)
    return start, start + timedelta(days=30)


@dataclass
class UserRollupOutcome:
    user_id: str
    count: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RollupReport:
    month: int
    year: int
    window_start: datetime
    window_end: datetime
    platform_count: int = 0
    outcomes: list[UserRollupOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[UserRollupOutcome]:
        return [o for o in self.outcomes if not o.ok]


class CommentStatsAggregator:
    """Builds one rollup per call.

    Each author runs inside savepoints on both stores, so a failed author is
    undone alone and the shared sessions stay usable for the rest.
    """

    def __init__(
        self,
        users: UserRepository,
        comments: CommentRepository,
        stats: StatRecordRepository,
    ):
        self._users = users
        self._comments = comments
        self._stats = stats

    async def run(self, now: datetime | None = None) -> RollupReport:
        now = now or datetime.now(timezone.utc)
        start, end = month_window(now)
        report = RollupReport(month=now.month, year=now.year, window_start=start, window_end=end)

        users = await self._users.list_active()
        for user in users:
            report.outcomes.append(await self._rollup_user(user.id, report))

        report.platform_count = await self._comments.count_roots_between(start, end)
        await self._stats.add(
            StatRecord(month=report.month, year=report.year, count=report.platform_count)
        )

        logger.info(
            "Comment rollup %02d/%d: %d authors, %d failed, %d platform comments",
            report.month, report.year, len(report.outcomes), len(report.failures),
            report.platform_count,
        )
        return report

    async def _rollup_user(self, user_id: str, report: RollupReport) -> UserRollupOutcome:
        try:
            async with self._comments.savepoint(), self._stats.savepoint():
                count = await self._comments.count_roots_between(
                    report.window_start, report.window_end, author_id=user_id
                )
                await self._stats.add(
                    StatRecord(month=report.month, year=report.year, count=count, reference=user_id)
                )
        except Exception as exc:
            logger.exception("Comment rollup failed for user %s", user_id)
            return UserRollupOutcome(user_id=user_id, error=f"{type(exc).__name__}: {exc}")
        return UserRollupOutcome(user_id=user_id, count=count)

"""Stats scheduler — asyncio daemon that triggers the comment rollup on a timer."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from content_desk.application.services.stats_aggregator import RollupReport

logger = logging.getLogger(__name__)


class CommentStatsScheduler:
    """Runs ``run_once`` every ``interval_seconds`` as an asyncio.Task inside the lifespan.

    The first run happens one full interval after start, so restarts do not
    append an extra rollup. ``run_once`` owns its sessions and commits.
    """

    def __init__(
        self,
        run_once: Callable[[], Awaitable[RollupReport]],
        interval_seconds: float,
    ) -> None:
        self._run_once = run_once
        self._interval = interval_seconds
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("CommentStatsScheduler started (every %ss)", self._interval)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        logger.info("CommentStatsScheduler stopped")

    async def _loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            try:
                await self.run_now()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("Comment rollup run failed")

    async def run_now(self) -> RollupReport:
        report = await self._run_once()
        for outcome in report.failures:
            logger.warning("Rollup skipped user %s: %s", outcome.user_id, outcome.error)
        return report

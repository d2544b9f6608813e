"""Health check endpoint, reporting reachability of both stores."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.config import get_settings
from content_desk.infrastructure.database.session import get_db_session, get_stats_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


async def _ping(session: AsyncSession, store: str) -> str:
    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Health check: %s store unreachable", store, exc_info=True)
        return "unreachable"
    return "ok"


@router.get("/health")
async def health_check(
    response: Response,
    content: AsyncSession = Depends(get_db_session),
    stats: AsyncSession = Depends(get_stats_session),
) -> dict:
    """Service version plus a ``SELECT 1`` against the content and stats stores.

    Answers 503 with ``status: degraded`` when either store does not respond.
    """
    settings = get_settings()
    stores = {
        "content": await _ping(content, "content"),
        "stats": await _ping(stats, "stats"),
    }
    healthy = all(state == "ok" for state in stores.values())
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "healthy" if healthy else "degraded",
        "version": settings.app_version,
        "environment": settings.app_env,
        "stores": stores,
    }

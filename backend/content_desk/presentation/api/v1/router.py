"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from content_desk.presentation.api.v1.endpoints.health import router as health_router
from content_desk.presentation.api.v1.endpoints.articles import router as articles_router
from content_desk.presentation.api.v1.endpoints.comment_settings import router as comment_settings_router
from content_desk.presentation.api.v1.endpoints.comments import router as comments_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(articles_router)
# /comments/settings must be matched before /comments/{comment_id}
router.include_router(comment_settings_router)
router.include_router(comments_router)

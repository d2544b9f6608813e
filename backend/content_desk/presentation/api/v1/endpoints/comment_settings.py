"""Per-user comment settings endpoints."""

from fastapi import APIRouter, Depends, Header, Response, status

from content_desk.application.schemas import CommentSettingsResponse, CommentSettingsUpdate
from content_desk.application.services import NOT_MODIFIED, CommentSettingsService
from content_desk.domain.entities import Actor
from content_desk.infrastructure.dependencies import get_actor, get_comment_settings_service

router = APIRouter(prefix="/comments/settings", tags=["Comment settings"])


@router.get(
    "",
    response_model=CommentSettingsResponse,
    responses={status.HTTP_304_NOT_MODIFIED: {"description": "Cached settings are still valid"}},
)
async def get_comment_settings(
    x_comments_ttl: int | None = Header(default=None),
    actor: Actor = Depends(get_actor),
    service: CommentSettingsService = Depends(get_comment_settings_service),
):
    """Return the caller's settings; 304 while the presented ttl (epoch ms) is unexpired."""
    settings = await service.get_settings(actor, presented_ttl=x_comments_ttl)
    if settings is NOT_MODIFIED:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)
    return CommentSettingsResponse.from_entity(settings)


@router.put("", response_model=CommentSettingsResponse)
async def save_comment_settings(
    data: CommentSettingsUpdate,
    actor: Actor = Depends(get_actor),
    service: CommentSettingsService = Depends(get_comment_settings_service),
) -> CommentSettingsResponse:
    settings = await service.save_settings(actor, data)
    return CommentSettingsResponse.from_entity(settings)

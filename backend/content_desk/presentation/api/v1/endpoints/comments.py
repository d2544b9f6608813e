"""Comment endpoints — the author's inbox, threads, answers and read tracking."""

from fastapi import APIRouter, Depends, Query, status

from content_desk.application.schemas import (
    AnswerCreate,
    AnswerListResponse,
    CommentListResponse,
    CommentResponse,
    CommentStatsResponse,
    CommentViewResponse,
    StatRecordResponse,
)
from content_desk.application.services import CommentStatsService, CommentThreadService
from content_desk.domain.entities import Actor
from content_desk.infrastructure.dependencies import (
    get_actor,
    get_comment_stats_service,
    get_comment_thread_service,
)

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("", response_model=CommentListResponse)
async def list_comments(
    type: str = Query("all", description="'all', 'not-readed' or 'only-readed'"),
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> CommentListResponse:
    """Root comments on the caller's articles, newest first, each with its latest answer."""
    result = await service.list_roots(actor, type, page=page, limit=limit)
    return CommentListResponse(
        comments=[CommentViewResponse.from_view(v) for v in result.comments],
        count=result.count,
        limit=result.limit,
    )


@router.get("/stats", response_model=CommentStatsResponse)
async def comment_stats(
    actor: Actor = Depends(get_actor),
    service: CommentStatsService = Depends(get_comment_stats_service),
) -> CommentStatsResponse:
    """Latest monthly rollup for the caller and for the whole platform."""
    user = await service.get_latest(actor.id)
    platform = await service.get_latest(None)
    return CommentStatsResponse(
        user=StatRecordResponse.model_validate(user, from_attributes=True) if user else None,
        platform=(
            StatRecordResponse.model_validate(platform, from_attributes=True) if platform else None
        ),
    )


@router.get("/{comment_id}", response_model=CommentViewResponse)
async def get_comment(
    comment_id: str,
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> CommentViewResponse:
    view = await service.get_thread(actor, comment_id)
    return CommentViewResponse.from_view(view)


@router.get("/{comment_id}/answers", response_model=AnswerListResponse)
async def list_answers(
    comment_id: str,
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> AnswerListResponse:
    result = await service.get_answers(actor, comment_id, page=page, limit=limit)
    return AnswerListResponse(
        answers=[CommentResponse.model_validate(c, from_attributes=True) for c in result.comments],
        count=result.count,
        limit=result.limit,
    )


@router.patch("/{comment_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    comment_id: str,
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> None:
    await service.mark_read(actor, comment_id)


@router.post(
    "/{comment_id}/answers",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def answer_comment(
    comment_id: str,
    data: AnswerCreate,
    notify: str = Query("no", description="'yes' to e-mail the reader"),
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> CommentResponse:
    answer = await service.answer(comment_id, actor, data.answer, notify=notify)
    return CommentResponse.model_validate(answer, from_attributes=True)

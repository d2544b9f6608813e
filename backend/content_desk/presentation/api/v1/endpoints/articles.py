"""Article endpoints — lifecycle, listings, images and per-article comments.

Domain errors propagate to the application-wide handler, which renders them
as ``{code, name, description}``.
"""

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from content_desk.application.schemas import (
    ArticleCommentsResponse,
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleStatesChange,
    ArticleStatesChangeResult,
    ArticleUpdate,
    CommentResponse,
    ExistingArticlesResponse,
    ImageResponse,
    TitleLookup,
)
from content_desk.application.services import (
    ArticleLifecycleService,
    ArticleQueryService,
    CommentThreadService,
)
from content_desk.domain.entities import Actor, ArticleView
from content_desk.infrastructure.dependencies import (
    get_actor,
    get_article_lifecycle_service,
    get_article_query_service,
    get_comment_thread_service,
)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ArticleResponse:
    """Create a draft article owned by the caller."""
    view = await service.create_article(actor, data.title)
    return ArticleResponse.from_view(view)


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    query: str | None = None,
    theme_id: str | None = None,
    category_id: str | None = None,
    type: str | None = Query(None, description="'personal' (default) or 'all' for admins"),
    order: str | None = Query(None, description="'desc' (default) or 'asc'"),
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_actor),
    service: ArticleQueryService = Depends(get_article_query_service),
) -> ArticleListResponse:
    result = await service.list_articles(
        actor,
        query=query,
        theme_id=theme_id,
        category_id=category_id,
        type=type,
        order=order,
        page=page,
        limit=limit,
    )
    return ArticleListResponse(
        articles=[ArticleResponse.from_view(v) for v in result.articles],
        count=result.count,
        limit=result.limit,
    )


@router.put("/states", response_model=ArticleStatesChangeResult)
async def change_states(
    data: ArticleStatesChange,
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ArticleStatesChangeResult:
    """Move many of the caller's articles at once; ineligible ones are skipped."""
    changed = await service.change_states(actor, data.articles_id, data.state)
    return ArticleStatesChangeResult(changed=changed)


@router.post("/exists-by-title", response_model=ExistingArticlesResponse)
async def exists_by_title(
    data: TitleLookup,
    actor: Actor = Depends(get_actor),
    service: ArticleQueryService = Depends(get_article_query_service),
) -> ExistingArticlesResponse:
    exist_articles, quantity = await service.exists_by_title(actor, data.title)
    return ExistingArticlesResponse(exist_articles=exist_articles, quantity=quantity)


@router.get("/{key}", response_model=ArticleResponse)
async def get_article(
    key: str,
    type: str = Query("id", description="'id' or 'customUri'"),
    actor: Actor = Depends(get_actor),
    service: ArticleQueryService = Depends(get_article_query_service),
) -> ArticleResponse:
    """Retrieve one article by id or custom URI."""
    view = await service.get_article(actor, key, type)
    return ArticleResponse.from_view(view)


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ArticleResponse:
    article = await service.update_article(article_id, data, actor)
    return ArticleResponse.from_view(ArticleView(article=article))


@router.put("/{article_id}/state", response_model=ArticleResponse)
async def change_state(
    article_id: str,
    state: str = Query(..., examples=["published"]),
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ArticleResponse:
    article = await service.change_state(article_id, actor, state)
    return ArticleResponse.from_view(ArticleView(article=article))


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_article(
    article_id: str,
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> None:
    """Soft-remove an article; its custom URI is released."""
    await service.remove_article(article_id, actor)


@router.put("/{article_id}/images", response_model=ImageResponse)
async def save_image(
    article_id: str,
    type: str = Query(..., description="'logo', 'secondary' or 'header'"),
    file: UploadFile = File(...),
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ImageResponse:
    content = await file.read()
    url = await service.save_image(
        article_id, type, content, file.filename or "image", actor
    )
    return ImageResponse(kind=type, url=url)


@router.delete("/{article_id}/images", status_code=status.HTTP_204_NO_CONTENT)
async def remove_image(
    article_id: str,
    type: str = Query(..., description="'logo', 'secondary' or 'header'"),
    actor: Actor = Depends(get_actor),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> None:
    await service.remove_image(article_id, type, actor)


@router.get("/{article_id}/comments", response_model=ArticleCommentsResponse)
async def list_article_comments(
    article_id: str,
    page: int | None = None,
    limit: int | None = None,
    actor: Actor = Depends(get_actor),
    service: CommentThreadService = Depends(get_comment_thread_service),
) -> ArticleCommentsResponse:
    result = await service.list_article_comments(actor, article_id, page=page, limit=limit)
    return ArticleCommentsResponse(
        comments=[CommentResponse.model_validate(c, from_attributes=True) for c in result.comments],
        count=result.count,
        limit=result.limit,
    )

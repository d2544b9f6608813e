"""Pydantic DTOs for comments and their answers."""

from datetime import datetime

from pydantic import BaseModel, Field

from content_desk.domain.entities import CommentView

from .article import AuthorResponse


class AnswerCreate(BaseModel):
    answer: str = Field(..., min_length=1, max_length=10_000)


class CommentResponse(BaseModel):
    id: str
    article_id: str
    answer_of: str | None = None
    user_name: str
    user_email: str
    message: str
    confirmed_at: datetime | None = None
    readed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleSummaryResponse(BaseModel):
    id: str
    title: str
    custom_uri: str | None = None
    author: AuthorResponse | None = None

    model_config = {"from_attributes": True}


class CommentViewResponse(CommentResponse):
    """A root comment with its article; ``answer`` on listings, ``answers`` on threads."""

    article: ArticleSummaryResponse | None = None
    answer: CommentResponse | None = None
    answers: list[CommentResponse] = []

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentViewResponse":
        base = CommentResponse.model_validate(view.comment, from_attributes=True)
        return cls(
            **base.model_dump(),
            article=(
                ArticleSummaryResponse.model_validate(view.article, from_attributes=True)
                if view.article
                else None
            ),
            answer=(
                CommentResponse.model_validate(view.answer, from_attributes=True)
                if view.answer
                else None
            ),
            answers=[
                CommentResponse.model_validate(a, from_attributes=True) for a in view.answers
            ],
        )


class CommentListResponse(BaseModel):
    comments: list[CommentViewResponse]
    count: int
    limit: int


class ArticleCommentsResponse(BaseModel):
    comments: list[CommentResponse]
    count: int
    limit: int


class AnswerListResponse(BaseModel):
    answers: list[CommentResponse]
    count: int
    limit: int

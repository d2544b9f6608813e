"""Pydantic DTOs for comment statistics."""

from datetime import datetime

from pydantic import BaseModel


class StatRecordResponse(BaseModel):
    id: int
    month: int
    year: int
    count: int
    reference: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentStatsResponse(BaseModel):
    user: StatRecordResponse | None = None
    platform: StatRecordResponse | None = None

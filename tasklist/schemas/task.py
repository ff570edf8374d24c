from datetime import datetime, UTC
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from tasklist.config import TITLE_MAX_LENGTH

TITLE_REQUIRED = "Title is required and cannot be empty"
TITLE_LENGTH = f"Title must be between 1-{TITLE_MAX_LENGTH} characters"


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # default + validate_default so a missing title reports the same message as a blank one
    title: str = Field(default=None, validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def title_trimmed_and_bounded(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(TITLE_REQUIRED)
        v = v.strip()
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(TITLE_LENGTH)
        return v


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    done: bool
    user_id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive values; they were stored as UTC
        return v.replace(tzinfo=UTC) if v.tzinfo is None else v.astimezone(UTC)


class TaskPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[TaskOut]
    page: int
    page_size: int
    total: int
    total_pages: int


class MessageOut(BaseModel):
    message: str

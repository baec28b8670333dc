"""Story Schemas — narratives owned by a user and set in one of their worlds.

Invariants:
    - Story.chapter_ids is the single source of chapter order
    - Chapter.story_id never changes
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Story(BaseModel):
    id: str
    world_id: str
    user_id: str
    title: str
    chapter_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class StoryCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)


class StoryUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=300)


class Chapter(BaseModel):
    id: str
    story_id: str
    title: str
    content: str = ""
    created_at: datetime
    updated_at: datetime


class ChapterCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field("", max_length=200_000)


class ChapterUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=300)
    content: str | None = Field(None, max_length=200_000)


class ChapterOrder(BaseModel):
    chapter_ids: list[str]

"""World Schemas — top-level container owned by one user.

Invariants:
    - World.user_id is set from the request context, never from the body
    - name is 1-200 chars after stripping
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _stripped_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class World(BaseModel):
    id: str
    user_id: str
    name: str
    description: str = ""
    settings: str = ""
    epoch: str = ""
    created_at: datetime
    updated_at: datetime


class WorldCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    settings: str = Field("", max_length=10_000)
    epoch: str = Field("", max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _stripped_name(v)


class WorldUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    settings: str | None = Field(None, max_length=10_000)
    epoch: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v if v is None else _stripped_name(v)

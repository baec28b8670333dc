"""Entity Schemas — characters, things, events and places inside a world.

Invariants:
    - kind is fixed at creation (taken from the URL collection, not the body)
    - attributes is a free-form JSON object; replaced wholesale on update
    - time and participant_ids are meaningful for events only; other kinds keep
      the defaults
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from imagix.core.domain_types import EntityKind


class Entity(BaseModel):
    id: str
    world_id: str
    kind: EntityKind
    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    time: int | None = None
    participant_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class EntityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    attributes: dict[str, Any] = Field(default_factory=dict)
    time: int | None = None
    participant_ids: list[str] = Field(default_factory=list, max_length=100)


class EntityUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    attributes: dict[str, Any] | None = None
    time: int | None = None
    participant_ids: list[str] | None = Field(None, max_length=100)

"""Relationship Schemas — directed, typed edges between two entities of one world.

Invariants:
    - kind is a free-text label ("mentor of", "owns", ...)
    - valid_from / valid_until are world-time integers; None means unbounded
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Relationship(BaseModel):
    id: str
    world_id: str
    kind: str
    from_id: str
    to_id: str
    valid_from: int | None = None
    valid_until: int | None = None
    created_at: datetime
    updated_at: datetime


class RelationshipCreate(BaseModel):
    kind: str = Field(min_length=1, max_length=100)
    from_id: str
    to_id: str
    valid_from: int | None = None


class RelationshipEnd(BaseModel):
    valid_until: int

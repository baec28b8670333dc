"""Relationship Routes — edges of a world, and their end / undo-end lifecycle."""

from fastapi import APIRouter, Depends, Response, status

from imagix.api.dependencies import get_relationship_handlers
from imagix.schemas.relationship import (
    Relationship, RelationshipCreate, RelationshipEnd,
)
from imagix.services.handle_relationships import RelationshipHandlers

router = APIRouter(
    prefix="/api/v1/worlds/{world_id}/relationships", tags=["relationships"],
)


@router.post(
    "", response_model=Relationship, status_code=status.HTTP_201_CREATED,
)
async def create_relationship(
    world_id: str, body: RelationshipCreate,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    return await handlers.create_relationship(world_id, body)


@router.get("", response_model=list[Relationship])
async def list_relationships(
    world_id: str,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    return await handlers.list_relationships(world_id)


@router.get("/{rel_id}", response_model=Relationship)
async def get_relationship(
    world_id: str, rel_id: str,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    return await handlers.get_relationship(world_id, rel_id)


@router.delete("/{rel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_relationship(
    world_id: str, rel_id: str,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    await handlers.delete_relationship(world_id, rel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{rel_id}/end", response_model=Relationship)
async def end_relationship(
    world_id: str, rel_id: str, body: RelationshipEnd,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    """Mark the relationship as no longer holding from valid_until on."""
    return await handlers.end_relationship(world_id, rel_id, body)


@router.delete("/{rel_id}/end", response_model=Relationship)
async def undo_end_relationship(
    world_id: str, rel_id: str,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    """Clear valid_until on an ended relationship."""
    return await handlers.undo_end_relationship(world_id, rel_id)

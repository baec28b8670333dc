"""Entity Routes — characters, things, events and places under /worlds/{world_id}/{collection}.

Invariants:
    - collection is one of characters | things | events | places; it fixes the entity kind
    - Registered after every other /worlds/{world_id}/<name> router, because
      {collection} would otherwise capture "relationships" and "stories"
"""

from fastapi import APIRouter, Depends, Response, status

from imagix.api.dependencies import get_entity_handlers
from imagix.core.domain_types import EntityCollection
from imagix.schemas.entity import Entity, EntityCreate, EntityUpdate
from imagix.services.handle_entities import EntityHandlers

router = APIRouter(prefix="/api/v1/worlds/{world_id}", tags=["entities"])


@router.post(
    "/{collection}", response_model=Entity,
    status_code=status.HTTP_201_CREATED,
)
async def create_entity(
    world_id: str, collection: EntityCollection, body: EntityCreate,
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    return await handlers.create_entity(world_id, collection.kind, body)


@router.get("/{collection}", response_model=list[Entity])
async def list_entities(
    world_id: str, collection: EntityCollection,
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    return await handlers.list_entities(world_id, collection.kind)


@router.get("/{collection}/{entity_id}", response_model=Entity)
async def get_entity(
    world_id: str, collection: EntityCollection, entity_id: str,
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    return await handlers.get_entity(world_id, collection.kind, entity_id)


@router.put("/{collection}/{entity_id}", response_model=Entity)
async def update_entity(
    world_id: str, collection: EntityCollection, entity_id: str,
    body: EntityUpdate,
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    return await handlers.update_entity(
        world_id, collection.kind, entity_id, body,
    )


@router.delete(
    "/{collection}/{entity_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_entity(
    world_id: str, collection: EntityCollection, entity_id: str,
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    """Delete the entity and every relationship it takes part in."""
    await handlers.delete_entity(world_id, collection.kind, entity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

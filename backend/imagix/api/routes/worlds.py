"""World Routes — CRUD for the caller's worlds.

Invariants:
    - Every route requires a Bearer token (via the handler dependency)
    - Routes never contain business logic (delegate to WorldHandlers)
"""

from fastapi import APIRouter, Depends, Response, status

from imagix.api.dependencies import get_world_handlers
from imagix.schemas.world import World, WorldCreate, WorldUpdate
from imagix.services.handle_worlds import WorldHandlers

router = APIRouter(prefix="/api/v1/worlds", tags=["worlds"])


@router.post("", response_model=World, status_code=status.HTTP_201_CREATED)
async def create_world(
    body: WorldCreate, handlers: WorldHandlers = Depends(get_world_handlers),
):
    return await handlers.create_world(body)


@router.get("", response_model=list[World])
async def list_worlds(handlers: WorldHandlers = Depends(get_world_handlers)):
    """Worlds owned by the caller, oldest first."""
    return await handlers.list_worlds()


@router.get("/{world_id}", response_model=World)
async def get_world(
    world_id: str, handlers: WorldHandlers = Depends(get_world_handlers),
):
    return await handlers.get_world(world_id)


@router.put("/{world_id}", response_model=World)
async def update_world(
    world_id: str, body: WorldUpdate,
    handlers: WorldHandlers = Depends(get_world_handlers),
):
    return await handlers.update_world(world_id, body)


@router.delete("/{world_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_world(
    world_id: str, handlers: WorldHandlers = Depends(get_world_handlers),
):
    """Delete the world with all its entities, relationships and stories."""
    await handlers.delete_world(world_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

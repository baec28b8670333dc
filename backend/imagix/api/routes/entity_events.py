"""Entity Event Routes — the timeline of events one entity takes part in.

Invariants:
    - Addressed by bare entity id; the owning world is resolved server-side
    - Foreign or unknown entity -> 404 "Entity not found"; owned entity in no event -> []
    - time_from / time_to are inclusive world-time bounds
"""

from fastapi import APIRouter, Depends, Query

from imagix.api.dependencies import get_entity_handlers
from imagix.schemas.entity import Entity
from imagix.services.handle_entities import EntityHandlers

router = APIRouter(prefix="/api/v1/entity-events", tags=["entities"])


@router.get("/{entity_id}", response_model=list[Entity])
async def list_entity_events(
    entity_id: str,
    time_from: int | None = Query(None),
    time_to: int | None = Query(None),
    handlers: EntityHandlers = Depends(get_entity_handlers),
):
    """Events with entity_id among their participants, in timeline order.

    A malformed entity_id is a 400, not a 404.
    """
    return await handlers.list_events(entity_id, time_from, time_to)

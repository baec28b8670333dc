"""Entity Relationship Routes — every relationship one entity takes part in.

Invariants:
    - Addressed by bare entity id; the owning world is resolved server-side
    - Foreign or unknown entity -> 404 "Entity not found"; owned entity with no edges -> []
"""

from fastapi import APIRouter, Depends

from imagix.api.dependencies import get_relationship_handlers
from imagix.schemas.relationship import Relationship
from imagix.services.handle_relationships import RelationshipHandlers

router = APIRouter(
    prefix="/api/v1/entity-relationships", tags=["relationships"],
)


@router.get("/{entity_id}", response_model=list[Relationship])
async def list_entity_relationships(
    entity_id: str,
    handlers: RelationshipHandlers = Depends(get_relationship_handlers),
):
    """Outgoing and incoming relationships, once each, in creation order.

    A malformed entity_id is a 400, not a 404.
    """
    return await handlers.list_by_entity(entity_id)

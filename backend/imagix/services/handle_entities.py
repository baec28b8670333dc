"""Entity Handlers — characters, things, events and places inside an owned world.

Invariants:
    - kind comes from the URL collection; an entity of another kind is not found
    - Every mutation verifies world ownership first (guard) and again at write time
    - delete_entity removes the entity's relationships and event links in the same
      transaction
    - Event participants must exist in the event's world (checked inside the write)
"""

import logging
from datetime import datetime, timezone

from imagix.core.domain_types import EntityKind
from imagix.core.event_rules import check_event_fields
from imagix.core.ids import create_id
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.entity import Entity, EntityCreate, EntityUpdate
from imagix.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)


class EntityHandlers:
    """Entity CRUD scoped to one world and one kind."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx
        self.guard = AccessGuard(repo, ctx)

    async def create_entity(
        self, world_id: str, kind: EntityKind, body: EntityCreate,
    ) -> Entity:
        await self.guard.require_world(world_id)
        check_event_fields(kind, body.time, body.participant_ids)
        now = datetime.now(timezone.utc)
        entity = Entity(
            id=create_id(kind.id_prefix), world_id=world_id, kind=kind,
            name=body.name, attributes=body.attributes,
            time=body.time, participant_ids=body.participant_ids,
            created_at=now, updated_at=now,
        )
        await self.repo.put_entity(entity, self.ctx.user_id)
        logger.info(
            f"{kind.value} created: {entity.name}",
            extra={
                "user_id": self.ctx.user_id, "world_id": world_id,
                "entity_id": entity.id,
            },
        )
        return entity

    async def list_entities(
        self, world_id: str, kind: EntityKind,
    ) -> list[Entity]:
        await self.guard.require_world(world_id)
        return await self.repo.list_entities(world_id, kind)

    async def get_entity(
        self, world_id: str, kind: EntityKind, entity_id: str,
    ) -> Entity:
        return await self.guard.require_world_entity(world_id, entity_id, kind)

    async def update_entity(
        self, world_id: str, kind: EntityKind, entity_id: str,
        body: EntityUpdate,
    ) -> Entity:
        entity = await self.guard.require_world_entity(world_id, entity_id, kind)
        updated = entity.model_copy(update={
            **body.model_dump(exclude_none=True),
            "updated_at": datetime.now(timezone.utc),
        })
        check_event_fields(kind, updated.time, updated.participant_ids)
        await self.repo.update_entity(updated, self.ctx.user_id)
        return updated

    async def delete_entity(
        self, world_id: str, kind: EntityKind, entity_id: str,
    ) -> None:
        entity = await self.guard.require_world_entity(world_id, entity_id, kind)
        removed = await self.repo.delete_entity(entity, self.ctx.user_id)
        logger.info(
            f"{kind.value} deleted with {len(removed)} relationships",
            extra={
                "user_id": self.ctx.user_id, "world_id": world_id,
                "entity_id": entity_id,
            },
        )

    async def list_events(
        self, entity_id: str,
        time_from: int | None = None, time_to: int | None = None,
    ) -> list[Entity]:
        """Events the entity takes part in, by world time, optionally windowed.

        Undated events are left out once either bound is given.
        """
        entity = await self.guard.require_entity(entity_id)
        events = await self.repo.list_events_by_entity(entity.world_id, entity.id)
        if time_from is None and time_to is None:
            return events
        return [
            e for e in events
            if e.time is not None
            and (time_from is None or e.time >= time_from)
            and (time_to is None or e.time <= time_to)
        ]

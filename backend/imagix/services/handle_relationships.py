"""Relationship Handlers — directed edges between entities, and per-entity listing.

Invariants:
    - Both endpoints exist in the relationship's world and differ (checked in the
      same transaction that writes the edge)
    - list_by_entity is symmetric: an edge appears for both of its endpoints
    - list_by_entity returns each relationship once, ordered by (created_at, id),
      and the same sequence on repeated calls with no writes in between
    - An unknown entity and an entity in a foreign world are both not found;
      an owned entity with no edges yields []

Design Decisions:
    - end / undo_end edit valid_until in place instead of deleting the edge,
      so world history keeps relationships that no longer hold
"""

import logging
from datetime import datetime, timezone

from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from imagix.core.listing import merge_relationship_views
from imagix.core.relationship_rules import (
    check_can_end, check_can_reopen, check_endpoints,
)
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.relationship import (
    Relationship, RelationshipCreate, RelationshipEnd,
)
from imagix.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)


class RelationshipHandlers:
    """Relationship lifecycle for one caller."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx
        self.guard = AccessGuard(repo, ctx)

    async def create_relationship(
        self, world_id: str, body: RelationshipCreate,
    ) -> Relationship:
        await self.guard.require_world(world_id)
        check_endpoints(body.from_id, body.to_id)
        now = datetime.now(timezone.utc)
        rel = Relationship(
            id=create_id(IdPrefix.RELATIONSHIP), world_id=world_id,
            **body.model_dump(), created_at=now, updated_at=now,
        )
        await self.repo.put_relationship(rel, self.ctx.user_id)
        logger.info(
            f"Relationship created: {rel.from_id} -[{rel.kind}]-> {rel.to_id}",
            extra={"user_id": self.ctx.user_id, "world_id": world_id},
        )
        return rel

    async def list_relationships(self, world_id: str) -> list[Relationship]:
        await self.guard.require_world(world_id)
        return await self.repo.list_relationships(world_id)

    async def get_relationship(
        self, world_id: str, rel_id: str,
    ) -> Relationship:
        return await self.guard.require_relationship(world_id, rel_id)

    async def delete_relationship(self, world_id: str, rel_id: str) -> None:
        rel = await self.guard.require_relationship(world_id, rel_id)
        await self.repo.delete_relationship(rel, self.ctx.user_id)
        logger.info(
            f"Relationship deleted: {rel_id}",
            extra={"user_id": self.ctx.user_id, "world_id": world_id},
        )

    async def end_relationship(
        self, world_id: str, rel_id: str, body: RelationshipEnd,
    ) -> Relationship:
        rel = await self.guard.require_relationship(world_id, rel_id)
        check_can_end(rel.valid_from, rel.valid_until, body.valid_until)
        return await self._set_valid_until(rel, body.valid_until)

    async def undo_end_relationship(
        self, world_id: str, rel_id: str,
    ) -> Relationship:
        rel = await self.guard.require_relationship(world_id, rel_id)
        check_can_reopen(rel.valid_until)
        return await self._set_valid_until(rel, None)

    async def list_by_entity(self, entity_id: str) -> list[Relationship]:
        """Every relationship where entity_id is source or target."""
        entity = await self.guard.require_entity(entity_id)
        outgoing, incoming = await self.repo.list_relationships_by_entity(
            entity.world_id, entity.id,
        )
        return merge_relationship_views(outgoing, incoming)

    async def _set_valid_until(
        self, rel: Relationship, valid_until: int | None,
    ) -> Relationship:
        updated = rel.model_copy(update={
            "valid_until": valid_until,
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.update_relationship(updated, self.ctx.user_id)
        return updated

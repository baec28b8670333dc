"""World Handlers — create, list, get, update, delete worlds of the calling user.

Invariants:
    - user_id on a new world comes from the request context, never the body
    - list returns only the caller's worlds, in creation order
    - delete cascades to entities, relationships, stories and chapters in one write
"""

import logging
from datetime import datetime, timezone

from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.world import World, WorldCreate, WorldUpdate
from imagix.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)


class WorldHandlers:
    """World CRUD for one caller."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx
        self.guard = AccessGuard(repo, ctx)

    async def create_world(self, body: WorldCreate) -> World:
        now = datetime.now(timezone.utc)
        world = World(
            id=create_id(IdPrefix.WORLD), user_id=self.ctx.user_id,
            **body.model_dump(), created_at=now, updated_at=now,
        )
        await self.repo.put_world(world)
        logger.info(
            f"World created: {world.name}",
            extra={"user_id": self.ctx.user_id, "world_id": world.id},
        )
        return world

    async def list_worlds(self) -> list[World]:
        return await self.repo.list_worlds_by_user(self.ctx.user_id)

    async def get_world(self, world_id: str) -> World:
        return await self.guard.require_world(world_id)

    async def update_world(self, world_id: str, body: WorldUpdate) -> World:
        world = await self.guard.require_world(world_id)
        updated = world.model_copy(update={
            **body.model_dump(exclude_none=True),
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.update_world(updated, self.ctx.user_id)
        return updated

    async def delete_world(self, world_id: str) -> None:
        await self.guard.require_world(world_id)
        removed = await self.repo.delete_world(world_id, self.ctx.user_id)
        logger.info(
            f"World deleted with {removed} items",
            extra={"user_id": self.ctx.user_id, "world_id": world_id},
        )

"""Access Guard — the one authorization boundary every handler passes through first.

Invariants:
    - Called before any other store access in a handler method
    - Malformed ids fail with BadRequestError before touching the store
    - Absent and foreign resources raise the same NotFoundError, named after the
      resource the caller asked for (an entity in a foreign world is "Entity not found")
    - Bare entity/story ids are resolved through their pointer item, then the owning
      world is checked with the pure ownership predicate

Design Decisions:
    - One guard shared by all handlers over per-handler checks: a single place to audit
    - Returns the loaded record, so handlers never re-read what the guard already fetched
"""

import logging

from imagix.core.domain_types import ENTITY_PREFIXES, EntityKind, IdPrefix
from imagix.core.errors import BadRequestError, NotFoundError
from imagix.core.ids import has_prefix
from imagix.core.ownership import ensure_owned, is_owned_by
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.entity import Entity
from imagix.schemas.relationship import Relationship
from imagix.schemas.story import Chapter, Story
from imagix.schemas.world import World

logger = logging.getLogger(__name__)


def require_id(value: str, *prefixes: IdPrefix, label: str) -> None:
    """Raise BadRequestError unless value is a well-formed id with one of the prefixes."""
    if not has_prefix(value, *prefixes):
        raise BadRequestError(f"Invalid {label} id")


class AccessGuard:
    """Ownership checks for the caller in ctx."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx

    async def require_world(self, world_id: str) -> World:
        require_id(world_id, IdPrefix.WORLD, label="world")
        world = await self.repo.get_world(world_id)
        return ensure_owned(world, self.ctx.user_id, "World")

    async def require_entity(self, entity_id: str) -> Entity:
        """Entity by bare id: pointer -> world -> ownership -> entity."""
        require_id(entity_id, *ENTITY_PREFIXES, label="entity")
        world_id = await self.repo.get_entity_world_id(entity_id)
        if world_id is None:
            raise NotFoundError("Entity")
        world = await self.repo.get_world(world_id)
        if not is_owned_by(world, self.ctx.user_id):
            logger.info(
                "Entity lookup outside caller's worlds",
                extra={"user_id": self.ctx.user_id, "entity_id": entity_id},
            )
            raise NotFoundError("Entity")
        entity = await self.repo.get_entity(world_id, entity_id)
        if entity is None:
            raise NotFoundError("Entity")
        return entity

    async def require_world_entity(
        self, world_id: str, entity_id: str, kind: EntityKind | None = None,
    ) -> Entity:
        """Entity addressed through its world; a kind mismatch is not found."""
        await self.require_world(world_id)
        require_id(entity_id, *ENTITY_PREFIXES, label="entity")
        entity = await self.repo.get_entity(world_id, entity_id)
        if entity is None or (kind is not None and entity.kind != kind):
            raise NotFoundError("Entity")
        return entity

    async def require_relationship(
        self, world_id: str, rel_id: str,
    ) -> Relationship:
        await self.require_world(world_id)
        require_id(rel_id, IdPrefix.RELATIONSHIP, label="relationship")
        rel = await self.repo.get_relationship(world_id, rel_id)
        if rel is None:
            raise NotFoundError("Relationship")
        return rel

    async def require_story(self, story_id: str) -> Story:
        """Story by bare id: pointer -> world -> ownership -> story."""
        require_id(story_id, IdPrefix.STORY, label="story")
        world_id = await self.repo.get_story_world_id(story_id)
        if world_id is None:
            raise NotFoundError("Story")
        world = await self.repo.get_world(world_id)
        if not is_owned_by(world, self.ctx.user_id):
            raise NotFoundError("Story")
        story = await self.repo.get_story(world_id, story_id)
        return ensure_owned(story, self.ctx.user_id, "Story")

    async def require_chapter(
        self, story_id: str, chapter_id: str,
    ) -> tuple[Story, Chapter]:
        story = await self.require_story(story_id)
        require_id(chapter_id, IdPrefix.CHAPTER, label="chapter")
        chapter = await self.repo.get_chapter(story_id, chapter_id)
        if chapter is None:
            raise NotFoundError("Chapter")
        return story, chapter

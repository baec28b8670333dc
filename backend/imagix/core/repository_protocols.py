"""Boundary Protocols — contracts between the access layer and the storage adapter.

Invariants:
    - Core NEVER imports from the shell; dependency arrows point inward only
    - The access layer sees records (World, Entity, ...) and ids, never keys or items
    - Every mutating method takes owner_id and re-checks world ownership inside the
      same atomic write; a failed re-check raises NotFoundError("World")
    - Multi-item writes are all-or-nothing

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL single-table repository and
      test doubles need no shared base class
    - Reads return None for absent items; only the access layer decides what absence means
"""

from typing import Protocol

from imagix.core.domain_types import EntityKind
from imagix.schemas.entity import Entity
from imagix.schemas.relationship import Relationship
from imagix.schemas.story import Chapter, Story
from imagix.schemas.world import World


class WorldRepository(Protocol):
    """World persistence and owner index."""
    async def get_world(self, world_id: str) -> World | None: ...
    async def list_worlds_by_user(self, user_id: str) -> list[World]: ...
    async def put_world(self, world: World) -> None: ...
    async def update_world(self, world: World, owner_id: str) -> None: ...
    async def delete_world(self, world_id: str, owner_id: str) -> int: ...


class EntityRepository(Protocol):
    """Entity persistence; delete_entity cascades to relationships and event links."""
    async def get_entity_world_id(self, entity_id: str) -> str | None: ...
    async def get_entity(self, world_id: str, entity_id: str) -> Entity | None: ...
    async def list_entities(
        self, world_id: str, kind: EntityKind,
    ) -> list[Entity]: ...
    async def list_events_by_entity(
        self, world_id: str, entity_id: str,
    ) -> list[Entity]: ...
    async def put_entity(self, entity: Entity, owner_id: str) -> None: ...
    async def update_entity(self, entity: Entity, owner_id: str) -> None: ...
    async def delete_entity(
        self, entity: Entity, owner_id: str,
    ) -> list[str]: ...


class RelationshipRepository(Protocol):
    """Relationship persistence with source- and target-indexed views."""
    async def get_relationship(
        self, world_id: str, rel_id: str,
    ) -> Relationship | None: ...
    async def list_relationships(self, world_id: str) -> list[Relationship]: ...
    async def list_relationships_by_entity(
        self, world_id: str, entity_id: str,
    ) -> tuple[list[Relationship], list[Relationship]]: ...
    async def put_relationship(
        self, rel: Relationship, owner_id: str,
    ) -> None: ...
    async def update_relationship(
        self, rel: Relationship, owner_id: str,
    ) -> None: ...
    async def delete_relationship(
        self, rel: Relationship, owner_id: str,
    ) -> None: ...


class StoryRepository(Protocol):
    """Story and chapter persistence plus the per-user story index."""
    async def get_story_world_id(self, story_id: str) -> str | None: ...
    async def get_story(self, world_id: str, story_id: str) -> Story | None: ...
    async def list_stories_by_user(self, user_id: str) -> list[Story]: ...
    async def list_stories_by_world(self, world_id: str) -> list[Story]: ...
    async def put_story(self, story: Story, owner_id: str) -> None: ...
    async def update_story(self, story: Story, owner_id: str) -> None: ...
    async def delete_story(self, story: Story, owner_id: str) -> None: ...
    async def get_chapter(
        self, story_id: str, chapter_id: str,
    ) -> Chapter | None: ...
    async def list_chapters(self, story_id: str) -> list[Chapter]: ...
    async def put_chapter(
        self, chapter: Chapter, story: Story, owner_id: str,
    ) -> None: ...
    async def update_chapter(
        self, chapter: Chapter, world_id: str, owner_id: str,
    ) -> None: ...
    async def delete_chapter(
        self, chapter: Chapter, story: Story, owner_id: str,
    ) -> None: ...


class ImagixRepository(
    WorldRepository, EntityRepository, RelationshipRepository, StoryRepository,
    Protocol,
):
    """Everything the access layer needs from the storage adapter."""

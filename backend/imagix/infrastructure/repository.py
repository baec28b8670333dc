"""Single-Table Repository — translates records to items and back; implements ImagixRepository.

Invariants:
    - Only this module and keys.py know the physical key layout
    - Every mutation is one transact_write that starts with (or is conditioned on)
      the world's owner check, so ownership is re-verified at write time
    - Relationship writes touch three items together: REL# in the world partition,
      REL_FROM# under the source entity, REL_TO# under the target entity
    - An event with participants writes one EVT# index item under each participant
    - Cascades delete dependents before the item they depend on, in the same transaction
    - Cascades enumerate their dependents only after the owner check has locked the
      world row, so a write racing the delete is either seen and removed or rejected

Design Decisions:
    - Index items carry only world_id and a record id; the record is read from the
      world partition so there is one copy of each record to update
    - Dangling index items (no matching record) are skipped on read
"""

import logging
from typing import Any

from imagix.core.domain_types import EntityKind
from imagix.core.errors import BadRequestError, NotFoundError
from imagix.core.event_rules import participant_changes
from imagix.core.listing import creation_order, timeline_order
from imagix.infrastructure import keys
from imagix.infrastructure.item_store import (
    Check, Condition, Delete, Put, SqlItemStore, StoredItem, WriteOp,
)
from imagix.schemas.entity import Entity
from imagix.schemas.relationship import Relationship
from imagix.schemas.story import Chapter, Story
from imagix.schemas.world import World

logger = logging.getLogger(__name__)


def _data(record: Any) -> dict:
    return record.model_dump(mode="json")


def _must_exist(resource_type: str) -> Condition:
    return Condition(exists=True, on_fail=NotFoundError(resource_type))


def _must_not_exist() -> Condition:
    return Condition(exists=False)


class SingleTableRepository:
    """ImagixRepository over an item store."""

    def __init__(self, store: SqlItemStore):
        self._store = store

    # ─── Ownership ──────────────────────────────────────────────

    @staticmethod
    def _owner_check(world_id: str, owner_id: str) -> Check:
        return Check(
            keys.world_pk(world_id), keys.META_SK,
            Condition(
                equals={"user_id": owner_id}, on_fail=NotFoundError("World"),
            ),
        )

    @staticmethod
    def _member_check(world_id: str, entity_id: str) -> Check:
        """entity_id must resolve to an entity of world_id."""
        return Check(
            keys.entity_pk(entity_id), keys.META_SK,
            Condition(
                equals={"world_id": world_id},
                on_fail=BadRequestError(
                    f"Entity '{entity_id}' does not exist in this world",
                ),
            ),
        )

    # ─── World ──────────────────────────────────────────────────

    def _world_item(self, world: World) -> StoredItem:
        return StoredItem(
            pk=keys.world_pk(world.id), sk=keys.META_SK,
            item_type=keys.ItemType.WORLD, data=_data(world),
            gsi1pk=keys.user_gsi1pk(world.user_id),
            gsi1sk=keys.world_gsi1sk(world.id),
        )

    async def get_world(self, world_id: str) -> World | None:
        item = await self._store.get(keys.world_pk(world_id), keys.META_SK)
        return World.model_validate(item.data) if item else None

    async def list_worlds_by_user(self, user_id: str) -> list[World]:
        items = await self._store.query_index(
            keys.user_gsi1pk(user_id), keys.Prefix.WORLD,
        )
        return creation_order(World.model_validate(i.data) for i in items)

    async def put_world(self, world: World) -> None:
        await self._store.transact_write([
            Put(self._world_item(world), _must_not_exist()),
        ])

    async def update_world(self, world: World, owner_id: str) -> None:
        await self._store.transact_write([
            Put(
                self._world_item(world),
                Condition(
                    equals={"user_id": owner_id},
                    on_fail=NotFoundError("World"),
                ),
            ),
        ])

    async def delete_world(self, world_id: str, owner_id: str) -> int:
        """Delete the world and everything in it. Returns the number of items removed."""
        pk = keys.world_pk(world_id)
        removed: list[WriteOp] = []

        async def cascade() -> list[WriteOp]:
            world_items = await self._store.query(pk)
            # Entity and story partitions first, then the world's own records.
            for item in world_items:
                if item.item_type in keys.ENTITY_ITEM_TYPES:
                    owned_pk = keys.entity_pk(item.data["id"])
                elif item.item_type == keys.ItemType.STORY:
                    owned_pk = keys.story_pk(item.data["id"])
                else:
                    continue
                removed.extend(
                    Delete(i.pk, i.sk) for i in await self._store.query(owned_pk)
                )
            removed.extend(
                Delete(i.pk, i.sk) for i in world_items if i.sk != keys.META_SK
            )
            removed.append(Delete(pk, keys.META_SK))
            return removed

        await self._store.transact_write(
            [self._owner_check(world_id, owner_id)], then=cascade,
        )
        return len(removed)

    # ─── Entity ─────────────────────────────────────────────────

    def _entity_item(self, entity: Entity) -> StoredItem:
        return StoredItem(
            pk=keys.world_pk(entity.world_id),
            sk=keys.entity_sk(entity.kind, entity.id),
            item_type=keys.entity_item_type(entity.kind), data=_data(entity),
        )

    def _participant_puts(
        self, event: Entity, participant_ids: list[str],
    ) -> list[WriteOp]:
        ops: list[WriteOp] = []
        for pid in participant_ids:
            ops.append(self._member_check(event.world_id, pid))
            ops.append(Put(StoredItem(
                pk=keys.entity_pk(pid), sk=keys.event_ref_sk(event.id),
                item_type=keys.ItemType.EVENT_REF,
                data={"world_id": event.world_id, "event_id": event.id},
            )))
        return ops

    async def _without_participant(
        self, world_id: str, event_id: str, participant_id: str,
    ) -> list[WriteOp]:
        """Rewrite of one event with participant_id dropped from it."""
        item = await self._store.get(
            keys.world_pk(world_id), keys.entity_sk(EntityKind.EVENT, event_id),
        )
        if item is None:
            return []
        event = Entity.model_validate(item.data)
        event = event.model_copy(update={
            "participant_ids": [
                p for p in event.participant_ids if p != participant_id
            ],
        })
        return [Put(self._entity_item(event), _must_exist("Event"))]

    async def get_entity_world_id(self, entity_id: str) -> str | None:
        item = await self._store.get(keys.entity_pk(entity_id), keys.META_SK)
        return item.data["world_id"] if item else None

    async def get_entity(self, world_id: str, entity_id: str) -> Entity | None:
        pk = keys.world_pk(world_id)
        for kind in EntityKind:
            item = await self._store.get(pk, keys.entity_sk(kind, entity_id))
            if item:
                return Entity.model_validate(item.data)
        return None

    async def list_entities(
        self, world_id: str, kind: EntityKind,
    ) -> list[Entity]:
        items = await self._store.query(
            keys.world_pk(world_id), keys.entity_sk_prefix(kind),
        )
        return creation_order(Entity.model_validate(i.data) for i in items)

    async def list_events_by_entity(
        self, world_id: str, entity_id: str,
    ) -> list[Entity]:
        """Events entity_id takes part in, in timeline order."""
        events = []
        for ref in await self._store.query(
            keys.entity_pk(entity_id), keys.Prefix.EVT,
        ):
            if ref.data["world_id"] != world_id:
                continue
            item = await self._store.get(
                keys.world_pk(world_id),
                keys.entity_sk(EntityKind.EVENT, ref.data["event_id"]),
            )
            if item:
                events.append(Entity.model_validate(item.data))
        return timeline_order(events)

    async def put_entity(self, entity: Entity, owner_id: str) -> None:
        await self._store.transact_write([
            self._owner_check(entity.world_id, owner_id),
            Put(self._entity_item(entity), _must_not_exist()),
            Put(
                StoredItem(
                    pk=keys.entity_pk(entity.id), sk=keys.META_SK,
                    item_type=keys.ItemType.ENTITY_REF,
                    data={"world_id": entity.world_id, "kind": entity.kind.value},
                ),
                _must_not_exist(),
            ),
            *self._participant_puts(entity, entity.participant_ids),
        ])

    async def update_entity(self, entity: Entity, owner_id: str) -> None:
        """Replace the entity record; an event's participant index follows its list."""
        pk = keys.world_pk(entity.world_id)
        sk = keys.entity_sk(entity.kind, entity.id)

        async def reindex() -> list[WriteOp]:
            current = await self._store.get(pk, sk)
            before = current.data.get("participant_ids", []) if current else []
            added, dropped = participant_changes(before, entity.participant_ids)
            return [
                *self._participant_puts(entity, added),
                *(
                    Delete(keys.entity_pk(pid), keys.event_ref_sk(entity.id))
                    for pid in dropped
                ),
                Put(self._entity_item(entity), _must_exist("Entity")),
            ]

        await self._store.transact_write([
            self._owner_check(entity.world_id, owner_id),
            Check(pk, sk, _must_exist("Entity")),
        ], then=reindex)

    async def delete_entity(self, entity: Entity, owner_id: str) -> list[str]:
        """Delete entity, every relationship it takes part in and its event links.

        Returns the removed relationship ids.
        """
        entity_pk = keys.entity_pk(entity.id)
        world_sk = keys.entity_sk(entity.kind, entity.id)
        removed: list[str] = []

        async def cascade() -> list[WriteOp]:
            ops: list[WriteOp] = []
            outgoing, incoming = await self.list_relationships_by_entity(
                entity.world_id, entity.id,
            )
            for rel in (*outgoing, *incoming):
                if rel.id in removed:
                    continue
                removed.append(rel.id)
                ops.extend(self._relationship_deletes(rel))

            for ref in await self._store.query(entity_pk):
                if ref.sk == keys.META_SK:
                    continue
                if ref.data.get("rel_id") in removed:
                    continue
                if ref.item_type == keys.ItemType.EVENT_REF:
                    ops.extend(await self._without_participant(
                        ref.data["world_id"], ref.data["event_id"], entity.id,
                    ))
                ops.append(Delete(ref.pk, ref.sk))

            current = await self._store.get(keys.world_pk(entity.world_id), world_sk)
            for pid in current.data.get("participant_ids", []) if current else []:
                ops.append(Delete(keys.entity_pk(pid), keys.event_ref_sk(entity.id)))

            ops.append(Delete(entity_pk, keys.META_SK))
            ops.append(Delete(
                keys.world_pk(entity.world_id), world_sk, _must_exist("Entity"),
            ))
            return ops

        await self._store.transact_write([
            self._owner_check(entity.world_id, owner_id),
            Check(
                entity_pk, keys.META_SK,
                Condition(
                    equals={"world_id": entity.world_id},
                    on_fail=NotFoundError("Entity"),
                ),
            ),
        ], then=cascade)
        return removed

    # ─── Relationship ───────────────────────────────────────────

    def _relationship_item(self, rel: Relationship) -> StoredItem:
        return StoredItem(
            pk=keys.world_pk(rel.world_id), sk=keys.relationship_sk(rel.id),
            item_type=keys.ItemType.RELATIONSHIP, data=_data(rel),
        )

    def _relationship_deletes(self, rel: Relationship) -> list[WriteOp]:
        return [
            Delete(keys.entity_pk(rel.from_id), keys.rel_from_sk(rel.id)),
            Delete(keys.entity_pk(rel.to_id), keys.rel_to_sk(rel.id)),
            Delete(keys.world_pk(rel.world_id), keys.relationship_sk(rel.id)),
        ]

    async def get_relationship(
        self, world_id: str, rel_id: str,
    ) -> Relationship | None:
        item = await self._store.get(
            keys.world_pk(world_id), keys.relationship_sk(rel_id),
        )
        return Relationship.model_validate(item.data) if item else None

    async def list_relationships(self, world_id: str) -> list[Relationship]:
        items = await self._store.query(keys.world_pk(world_id), keys.Prefix.REL)
        return creation_order(Relationship.model_validate(i.data) for i in items)

    async def list_relationships_by_entity(
        self, world_id: str, entity_id: str,
    ) -> tuple[list[Relationship], list[Relationship]]:
        """(outgoing, incoming) relationships of one entity, from the two index views."""
        pk = keys.entity_pk(entity_id)
        views = []
        for prefix in (keys.Prefix.REL_FROM, keys.Prefix.REL_TO):
            rels = []
            for ref in await self._store.query(pk, prefix):
                if ref.data["world_id"] != world_id:
                    continue
                rel = await self.get_relationship(world_id, ref.data["rel_id"])
                if rel:
                    rels.append(rel)
            views.append(rels)
        return views[0], views[1]

    async def put_relationship(self, rel: Relationship, owner_id: str) -> None:
        ref = {"world_id": rel.world_id, "rel_id": rel.id}
        ops: list[WriteOp] = [
            self._owner_check(rel.world_id, owner_id),
            self._member_check(rel.world_id, rel.from_id),
            self._member_check(rel.world_id, rel.to_id),
        ]
        ops.extend([
            Put(self._relationship_item(rel), _must_not_exist()),
            Put(StoredItem(
                pk=keys.entity_pk(rel.from_id), sk=keys.rel_from_sk(rel.id),
                item_type=keys.ItemType.REL_FROM, data=ref,
            ), _must_not_exist()),
            Put(StoredItem(
                pk=keys.entity_pk(rel.to_id), sk=keys.rel_to_sk(rel.id),
                item_type=keys.ItemType.REL_TO, data=ref,
            ), _must_not_exist()),
        ])
        await self._store.transact_write(ops)

    async def update_relationship(self, rel: Relationship, owner_id: str) -> None:
        await self._store.transact_write([
            self._owner_check(rel.world_id, owner_id),
            Put(self._relationship_item(rel), _must_exist("Relationship")),
        ])

    async def delete_relationship(self, rel: Relationship, owner_id: str) -> None:
        await self._store.transact_write([
            self._owner_check(rel.world_id, owner_id),
            *self._relationship_deletes(rel),
        ])

    # ─── Story ──────────────────────────────────────────────────

    def _story_item(self, story: Story) -> StoredItem:
        return StoredItem(
            pk=keys.world_pk(story.world_id), sk=keys.story_sk(story.id),
            item_type=keys.ItemType.STORY, data=_data(story),
            gsi1pk=keys.user_gsi1pk(story.user_id),
            gsi1sk=keys.story_sk(story.id),
        )

    async def _story_deletes(self, story_id: str, world_id: str) -> list[WriteOp]:
        ops: list[WriteOp] = [
            Delete(i.pk, i.sk)
            for i in await self._store.query(keys.story_pk(story_id), keys.Prefix.CHAP)
        ]
        ops.append(Delete(keys.story_pk(story_id), keys.META_SK))
        ops.append(Delete(keys.world_pk(world_id), keys.story_sk(story_id)))
        return ops

    async def get_story_world_id(self, story_id: str) -> str | None:
        item = await self._store.get(keys.story_pk(story_id), keys.META_SK)
        return item.data["world_id"] if item else None

    async def get_story(self, world_id: str, story_id: str) -> Story | None:
        item = await self._store.get(
            keys.world_pk(world_id), keys.story_sk(story_id),
        )
        return Story.model_validate(item.data) if item else None

    async def list_stories_by_user(self, user_id: str) -> list[Story]:
        items = await self._store.query_index(
            keys.user_gsi1pk(user_id), keys.Prefix.STORY,
        )
        return creation_order(Story.model_validate(i.data) for i in items)

    async def list_stories_by_world(self, world_id: str) -> list[Story]:
        items = await self._store.query(keys.world_pk(world_id), keys.Prefix.STORY)
        return creation_order(Story.model_validate(i.data) for i in items)

    async def put_story(self, story: Story, owner_id: str) -> None:
        await self._store.transact_write([
            self._owner_check(story.world_id, owner_id),
            Put(self._story_item(story), _must_not_exist()),
            Put(StoredItem(
                pk=keys.story_pk(story.id), sk=keys.META_SK,
                item_type=keys.ItemType.STORY_REF,
                data={"world_id": story.world_id},
            ), _must_not_exist()),
        ])

    async def update_story(self, story: Story, owner_id: str) -> None:
        await self._store.transact_write([
            self._owner_check(story.world_id, owner_id),
            Put(self._story_item(story), _must_exist("Story")),
        ])

    async def delete_story(self, story: Story, owner_id: str) -> None:
        async def cascade() -> list[WriteOp]:
            return await self._story_deletes(story.id, story.world_id)

        await self._store.transact_write(
            [self._owner_check(story.world_id, owner_id)], then=cascade,
        )

    # ─── Chapter ────────────────────────────────────────────────

    def _chapter_item(self, chapter: Chapter) -> StoredItem:
        return StoredItem(
            pk=keys.story_pk(chapter.story_id), sk=keys.chapter_sk(chapter.id),
            item_type=keys.ItemType.CHAPTER, data=_data(chapter),
        )

    async def get_chapter(
        self, story_id: str, chapter_id: str,
    ) -> Chapter | None:
        item = await self._store.get(
            keys.story_pk(story_id), keys.chapter_sk(chapter_id),
        )
        return Chapter.model_validate(item.data) if item else None

    async def list_chapters(self, story_id: str) -> list[Chapter]:
        items = await self._store.query(keys.story_pk(story_id), keys.Prefix.CHAP)
        return creation_order(Chapter.model_validate(i.data) for i in items)

    async def put_chapter(
        self, chapter: Chapter, story: Story, owner_id: str,
    ) -> None:
        await self._store.transact_write([
            self._owner_check(story.world_id, owner_id),
            Put(self._chapter_item(chapter), _must_not_exist()),
            Put(self._story_item(story), _must_exist("Story")),
        ])

    async def update_chapter(
        self, chapter: Chapter, world_id: str, owner_id: str,
    ) -> None:
        await self._store.transact_write([
            self._owner_check(world_id, owner_id),
            Put(self._chapter_item(chapter), _must_exist("Chapter")),
        ])

    async def delete_chapter(
        self, chapter: Chapter, story: Story, owner_id: str,
    ) -> None:
        await self._store.transact_write([
            self._owner_check(story.world_id, owner_id),
            Delete(
                keys.story_pk(chapter.story_id), keys.chapter_sk(chapter.id),
                _must_exist("Chapter"),
            ),
            Put(self._story_item(story), _must_exist("Story")),
        ])

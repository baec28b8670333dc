"""Chapter Handlers — ordered chapters of a story.

Invariants:
    - Story.chapter_ids is the only record of order; chapters are listed in that order
    - Creating appends to the order, deleting removes from it, in the same write
      as the chapter item
    - reorder accepts exactly a permutation of the current chapter ids
"""

import logging
from datetime import datetime, timezone

from imagix.core import chapter_order
from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.story import (
    Chapter, ChapterCreate, ChapterOrder, ChapterUpdate, Story,
)
from imagix.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)


class ChapterHandlers:
    """Chapter CRUD and ordering for one caller."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx
        self.guard = AccessGuard(repo, ctx)

    async def create_chapter(self, story_id: str, body: ChapterCreate) -> Chapter:
        story = await self.guard.require_story(story_id)
        now = datetime.now(timezone.utc)
        chapter = Chapter(
            id=create_id(IdPrefix.CHAPTER), story_id=story_id,
            title=body.title, content=body.content,
            created_at=now, updated_at=now,
        )
        updated_story = story.model_copy(update={
            "chapter_ids": chapter_order.append(story.chapter_ids, chapter.id),
            "updated_at": now,
        })
        await self.repo.put_chapter(chapter, updated_story, self.ctx.user_id)
        logger.info(
            f"Chapter created: {chapter.title}",
            extra={"user_id": self.ctx.user_id, "world_id": story.world_id},
        )
        return chapter

    async def list_chapters(self, story_id: str) -> list[Chapter]:
        story = await self.guard.require_story(story_id)
        by_id = {c.id: c for c in await self.repo.list_chapters(story_id)}
        return [by_id[cid] for cid in story.chapter_ids if cid in by_id]

    async def get_chapter(self, story_id: str, chapter_id: str) -> Chapter:
        _, chapter = await self.guard.require_chapter(story_id, chapter_id)
        return chapter

    async def update_chapter(
        self, story_id: str, chapter_id: str, body: ChapterUpdate,
    ) -> Chapter:
        story, chapter = await self.guard.require_chapter(story_id, chapter_id)
        updated = chapter.model_copy(update={
            **body.model_dump(exclude_none=True),
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.update_chapter(updated, story.world_id, self.ctx.user_id)
        return updated

    async def delete_chapter(self, story_id: str, chapter_id: str) -> None:
        story, chapter = await self.guard.require_chapter(story_id, chapter_id)
        updated_story = story.model_copy(update={
            "chapter_ids": chapter_order.remove(story.chapter_ids, chapter_id),
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.delete_chapter(chapter, updated_story, self.ctx.user_id)

    async def reorder_chapters(self, story_id: str, body: ChapterOrder) -> Story:
        story = await self.guard.require_story(story_id)
        updated = story.model_copy(update={
            "chapter_ids": chapter_order.reorder(
                story.chapter_ids, body.chapter_ids,
            ),
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.update_story(updated, self.ctx.user_id)
        return updated

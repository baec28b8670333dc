"""Story Handlers — stories set in the caller's worlds.

Invariants:
    - list_by_user takes no user parameter: it always lists the context user's stories
    - A story is visible only when both the story and its world belong to the caller
    - delete_story removes its chapters in the same transaction
"""

import logging
from datetime import datetime, timezone

from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from imagix.core.repository_protocols import ImagixRepository
from imagix.core.request_context import RequestContext
from imagix.schemas.story import Story, StoryCreate, StoryUpdate
from imagix.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)


class StoryHandlers:
    """Story CRUD for one caller."""

    def __init__(self, repo: ImagixRepository, ctx: RequestContext):
        self.repo = repo
        self.ctx = ctx
        self.guard = AccessGuard(repo, ctx)

    async def create_story(self, world_id: str, body: StoryCreate) -> Story:
        await self.guard.require_world(world_id)
        now = datetime.now(timezone.utc)
        story = Story(
            id=create_id(IdPrefix.STORY), world_id=world_id,
            user_id=self.ctx.user_id, title=body.title,
            created_at=now, updated_at=now,
        )
        await self.repo.put_story(story, self.ctx.user_id)
        logger.info(
            f"Story created: {story.title}",
            extra={"user_id": self.ctx.user_id, "world_id": world_id},
        )
        return story

    async def list_by_user(self) -> list[Story]:
        return await self.repo.list_stories_by_user(self.ctx.user_id)

    async def list_by_world(self, world_id: str) -> list[Story]:
        await self.guard.require_world(world_id)
        return [
            s for s in await self.repo.list_stories_by_world(world_id)
            if s.user_id == self.ctx.user_id
        ]

    async def get_story(self, story_id: str) -> Story:
        return await self.guard.require_story(story_id)

    async def update_story(self, story_id: str, body: StoryUpdate) -> Story:
        story = await self.guard.require_story(story_id)
        updated = story.model_copy(update={
            **body.model_dump(exclude_none=True),
            "updated_at": datetime.now(timezone.utc),
        })
        await self.repo.update_story(updated, self.ctx.user_id)
        return updated

    async def delete_story(self, story_id: str) -> None:
        story = await self.guard.require_story(story_id)
        await self.repo.delete_story(story, self.ctx.user_id)
        logger.info(
            f"Story deleted: {story_id}",
            extra={"user_id": self.ctx.user_id, "world_id": story.world_id},
        )

"""Route Dependencies — wire request context, repository and handlers per request.

Invariants:
    - One repository (and one AsyncSession) per request
    - Handlers are built with the caller's RequestContext; routes never pass user ids
    - Context is resolved before the database session
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from imagix.api.auth import get_request_context
from imagix.core.request_context import RequestContext
from imagix.infrastructure.database import get_db
from imagix.infrastructure.item_store import SqlItemStore
from imagix.infrastructure.repository import SingleTableRepository
from imagix.services.handle_chapters import ChapterHandlers
from imagix.services.handle_entities import EntityHandlers
from imagix.services.handle_relationships import RelationshipHandlers
from imagix.services.handle_stories import StoryHandlers
from imagix.services.handle_worlds import WorldHandlers


def get_repository(db: AsyncSession = Depends(get_db)) -> SingleTableRepository:
    return SingleTableRepository(SqlItemStore(db))


def get_world_handlers(
    ctx: RequestContext = Depends(get_request_context),
    repo: SingleTableRepository = Depends(get_repository),
) -> WorldHandlers:
    return WorldHandlers(repo, ctx)


def get_entity_handlers(
    ctx: RequestContext = Depends(get_request_context),
    repo: SingleTableRepository = Depends(get_repository),
) -> EntityHandlers:
    return EntityHandlers(repo, ctx)


def get_relationship_handlers(
    ctx: RequestContext = Depends(get_request_context),
    repo: SingleTableRepository = Depends(get_repository),
) -> RelationshipHandlers:
    return RelationshipHandlers(repo, ctx)


def get_story_handlers(
    ctx: RequestContext = Depends(get_request_context),
    repo: SingleTableRepository = Depends(get_repository),
) -> StoryHandlers:
    return StoryHandlers(repo, ctx)


def get_chapter_handlers(
    ctx: RequestContext = Depends(get_request_context),
    repo: SingleTableRepository = Depends(get_repository),
) -> ChapterHandlers:
    return ChapterHandlers(repo, ctx)

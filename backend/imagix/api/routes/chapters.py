"""Chapter Routes — chapters of a story and their order.

Invariants:
    - PUT /order is declared before /{chapter_id} routes
"""

from fastapi import APIRouter, Depends, Response, status

from imagix.api.dependencies import get_chapter_handlers
from imagix.schemas.story import (
    Chapter, ChapterCreate, ChapterOrder, ChapterUpdate, Story,
)
from imagix.services.handle_chapters import ChapterHandlers

router = APIRouter(
    prefix="/api/v1/stories/{story_id}/chapters", tags=["chapters"],
)


@router.post("", response_model=Chapter, status_code=status.HTTP_201_CREATED)
async def create_chapter(
    story_id: str, body: ChapterCreate,
    handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    """Create a chapter at the end of the story."""
    return await handlers.create_chapter(story_id, body)


@router.get("", response_model=list[Chapter])
async def list_chapters(
    story_id: str, handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    """Chapters in story order."""
    return await handlers.list_chapters(story_id)


@router.put("/order", response_model=Story)
async def reorder_chapters(
    story_id: str, body: ChapterOrder,
    handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    return await handlers.reorder_chapters(story_id, body)


@router.get("/{chapter_id}", response_model=Chapter)
async def get_chapter(
    story_id: str, chapter_id: str,
    handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    return await handlers.get_chapter(story_id, chapter_id)


@router.put("/{chapter_id}", response_model=Chapter)
async def update_chapter(
    story_id: str, chapter_id: str, body: ChapterUpdate,
    handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    return await handlers.update_chapter(story_id, chapter_id, body)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chapter(
    story_id: str, chapter_id: str,
    handlers: ChapterHandlers = Depends(get_chapter_handlers),
):
    await handlers.delete_chapter(story_id, chapter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

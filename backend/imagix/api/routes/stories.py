"""Story Routes — stories per world, the caller's story list, and story CRUD."""

from fastapi import APIRouter, Depends, Response, status

from imagix.api.dependencies import get_story_handlers
from imagix.schemas.story import Story, StoryCreate, StoryUpdate
from imagix.services.handle_stories import StoryHandlers

router = APIRouter(prefix="/api/v1", tags=["stories"])


@router.post(
    "/worlds/{world_id}/stories", response_model=Story,
    status_code=status.HTTP_201_CREATED,
)
async def create_story(
    world_id: str, body: StoryCreate,
    handlers: StoryHandlers = Depends(get_story_handlers),
):
    return await handlers.create_story(world_id, body)


@router.get("/worlds/{world_id}/stories", response_model=list[Story])
async def list_world_stories(
    world_id: str, handlers: StoryHandlers = Depends(get_story_handlers),
):
    return await handlers.list_by_world(world_id)


@router.get("/user-stories", response_model=list[Story])
async def list_user_stories(
    handlers: StoryHandlers = Depends(get_story_handlers),
):
    """Stories owned by the caller across all worlds."""
    return await handlers.list_by_user()


@router.get("/stories/{story_id}", response_model=Story)
async def get_story(
    story_id: str, handlers: StoryHandlers = Depends(get_story_handlers),
):
    return await handlers.get_story(story_id)


@router.put("/stories/{story_id}", response_model=Story)
async def update_story(
    story_id: str, body: StoryUpdate,
    handlers: StoryHandlers = Depends(get_story_handlers),
):
    return await handlers.update_story(story_id, body)


@router.delete("/stories/{story_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_story(
    story_id: str, handlers: StoryHandlers = Depends(get_story_handlers),
):
    await handlers.delete_story(story_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

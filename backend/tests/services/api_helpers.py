"""Request helpers shared by route tests — tokens, and record creation returning JSON."""

import jwt
from httpx import AsyncClient

from imagix.config import get_settings

ALICE = "user-alice"
BOB = "user-bob"


def make_token(user_id: str | None, **claims) -> str:
    """Token signed the way the API verifies it."""
    settings = get_settings()
    payload = dict(claims)
    if user_id is not None:
        payload["sub"] = user_id
    return jwt.encode(
        payload, settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
    )


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


async def create_world(
    client: AsyncClient, headers: dict, name: str = "Aerth",
) -> dict:
    res = await client.post(
        "/api/v1/worlds", json={"name": name}, headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def create_entity(
    client: AsyncClient, headers: dict, world_id: str,
    collection: str = "characters", name: str = "Ilsa",
) -> dict:
    res = await client.post(
        f"/api/v1/worlds/{world_id}/{collection}",
        json={"name": name}, headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def create_event(
    client: AsyncClient, headers: dict, world_id: str,
    participant_ids: list[str], time: int | None = None, name: str = "Battle",
) -> dict:
    res = await client.post(
        f"/api/v1/worlds/{world_id}/events",
        json={"name": name, "time": time, "participant_ids": participant_ids},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def create_relationship(
    client: AsyncClient, headers: dict, world_id: str,
    from_id: str, to_id: str, kind: str = "knows", **extra,
) -> dict:
    res = await client.post(
        f"/api/v1/worlds/{world_id}/relationships",
        json={"kind": kind, "from_id": from_id, "to_id": to_id, **extra},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def create_story(
    client: AsyncClient, headers: dict, world_id: str, title: str = "Saga",
) -> dict:
    res = await client.post(
        f"/api/v1/worlds/{world_id}/stories",
        json={"title": title}, headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()


async def create_chapter(
    client: AsyncClient, headers: dict, story_id: str, title: str,
) -> dict:
    res = await client.post(
        f"/api/v1/stories/{story_id}/chapters",
        json={"title": title}, headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()

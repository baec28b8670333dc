"""World Routes — CRUD, owner isolation and cascade delete through the HTTP API.

Invariants:
    - Every route rejects requests without a valid Bearer token (401)
    - A world owned by another user is indistinguishable from a missing one (404)
    - Deleting a world removes everything inside it
"""

from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from tests.services.api_helpers import (
    create_entity, create_relationship, create_story, create_world,
)


async def test_create_world_returns_201_with_owner(client, alice):
    res = await client.post(
        "/api/v1/worlds",
        json={"name": "  Aerth  ", "description": "A flat world"},
        headers=alice,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["id"].startswith("wld_")
    assert body["name"] == "Aerth"
    assert body["user_id"] == "user-alice"
    assert body["description"] == "A flat world"


async def test_create_world_ignores_client_user_id(client, alice):
    res = await client.post(
        "/api/v1/worlds",
        json={"name": "Aerth", "user_id": "user-bob"},
        headers=alice,
    )
    assert res.json()["user_id"] == "user-alice"


async def test_create_world_blank_name_is_validation_error(client, alice):
    res = await client.post(
        "/api/v1/worlds", json={"name": "   "}, headers=alice,
    )
    assert res.status_code == 400
    body = res.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]


async def test_list_worlds_returns_only_callers_worlds(client, alice, bob):
    first = await create_world(client, alice, "First")
    second = await create_world(client, alice, "Second")
    await create_world(client, bob, "Elsewhere")

    res = await client.get("/api/v1/worlds", headers=alice)
    assert res.status_code == 200
    assert [w["id"] for w in res.json()] == [first["id"], second["id"]]


async def test_get_foreign_world_is_not_found(client, alice, bob):
    world = await create_world(client, alice)
    res = await client.get(f"/api/v1/worlds/{world['id']}", headers=bob)
    assert res.status_code == 404
    assert res.json() == {"message": "World not found", "code": "NOT_FOUND"}


async def test_get_missing_world_matches_foreign_world_response(client, bob):
    res = await client.get(
        f"/api/v1/worlds/{create_id(IdPrefix.WORLD)}", headers=bob,
    )
    assert res.status_code == 404
    assert res.json() == {"message": "World not found", "code": "NOT_FOUND"}


async def test_malformed_world_id_is_bad_request(client, alice):
    res = await client.get("/api/v1/worlds/not-an-id", headers=alice)
    assert res.status_code == 400
    assert res.json()["code"] == "BAD_REQUEST"


async def test_update_world_changes_only_given_fields(client, alice):
    world = await create_world(client, alice)
    res = await client.put(
        f"/api/v1/worlds/{world['id']}",
        json={"epoch": "Third Age"}, headers=alice,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["epoch"] == "Third Age"
    assert body["name"] == world["name"]

    again = await client.get(f"/api/v1/worlds/{world['id']}", headers=alice)
    assert again.json()["epoch"] == "Third Age"


async def test_update_world_blank_name_is_validation_error(client, alice):
    world = await create_world(client, alice)
    res = await client.put(
        f"/api/v1/worlds/{world['id']}", json={"name": "   "}, headers=alice,
    )
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"

    unchanged = await client.get(f"/api/v1/worlds/{world['id']}", headers=alice)
    assert unchanged.json()["name"] == world["name"]


async def test_update_foreign_world_is_not_found(client, alice, bob):
    world = await create_world(client, alice)
    res = await client.put(
        f"/api/v1/worlds/{world['id']}", json={"name": "Mine"}, headers=bob,
    )
    assert res.status_code == 404

    unchanged = await client.get(f"/api/v1/worlds/{world['id']}", headers=alice)
    assert unchanged.json()["name"] == world["name"]


async def test_delete_world_cascades_to_contents(client, alice):
    world = await create_world(client, alice)
    a = await create_entity(client, alice, world["id"], "characters", "A")
    b = await create_entity(client, alice, world["id"], "things", "B")
    await create_relationship(client, alice, world["id"], a["id"], b["id"])
    story = await create_story(client, alice, world["id"])

    res = await client.delete(f"/api/v1/worlds/{world['id']}", headers=alice)
    assert res.status_code == 204

    assert (await client.get(
        f"/api/v1/worlds/{world['id']}", headers=alice,
    )).status_code == 404
    assert (await client.get(
        f"/api/v1/entity-relationships/{a['id']}", headers=alice,
    )).status_code == 404
    assert (await client.get(
        f"/api/v1/stories/{story['id']}", headers=alice,
    )).status_code == 404
    assert (await client.get(
        "/api/v1/user-stories", headers=alice,
    )).json() == []


async def test_delete_foreign_world_leaves_it_intact(client, alice, bob):
    world = await create_world(client, alice)
    res = await client.delete(f"/api/v1/worlds/{world['id']}", headers=bob)
    assert res.status_code == 404
    assert (await client.get(
        f"/api/v1/worlds/{world['id']}", headers=alice,
    )).status_code == 200

"""Event Routes — participants, the per-entity event index and its cleanup.

Invariants:
    - Participants must exist in the event's world; otherwise 400 and nothing is written
    - GET /entity-events/{id} lists an entity's events by world time
    - Updating participants moves the event between timelines
    - Deleting a participant drops it from every event; deleting an event drops it
      from every timeline
    - Foreign or unknown entities are 404, like /entity-relationships
"""

from imagix.core.domain_types import IdPrefix
from imagix.core.ids import create_id
from tests.services.api_helpers import create_entity, create_event, create_world


async def _timeline(client, headers, entity_id, **params):
    res = await client.get(
        f"/api/v1/entity-events/{entity_id}", params=params, headers=headers,
    )
    assert res.status_code == 200, res.text
    return [e["id"] for e in res.json()]


async def test_event_appears_on_each_participants_timeline(client, alice):
    world = await create_world(client, alice)
    hero = await create_entity(client, alice, world["id"], "characters")
    keep = await create_entity(client, alice, world["id"], "places", "Keep")
    evt = await create_event(client, alice, world["id"], [hero["id"], keep["id"]], 40)

    assert evt["participant_ids"] == [hero["id"], keep["id"]]
    assert evt["time"] == 40
    assert await _timeline(client, alice, hero["id"]) == [evt["id"]]
    assert await _timeline(client, alice, keep["id"]) == [evt["id"]]


async def test_timeline_is_ordered_by_world_time(client, alice):
    world = await create_world(client, alice)
    hero = await create_entity(client, alice, world["id"])
    late = await create_event(client, alice, world["id"], [hero["id"]], 900)
    undated = await create_event(client, alice, world["id"], [hero["id"]])
    early = await create_event(client, alice, world["id"], [hero["id"]], -5)

    assert await _timeline(client, alice, hero["id"]) == [
        early["id"], late["id"], undated["id"],
    ]
    assert await _timeline(
        client, alice, hero["id"], time_from=0, time_to=900,
    ) == [late["id"]]


async def test_unknown_participant_is_bad_request(client, alice):
    world = await create_world(client, alice)
    hero = await create_entity(client, alice, world["id"])
    ghost = create_id(IdPrefix.CHARACTER)

    res = await client.post(
        f"/api/v1/worlds/{world['id']}/events",
        json={"name": "Duel", "participant_ids": [hero["id"], ghost]},
        headers=alice,
    )
    assert res.status_code == 400
    assert ghost in res.json()["message"]
    assert (await client.get(
        f"/api/v1/worlds/{world['id']}/events", headers=alice,
    )).json() == []
    assert await _timeline(client, alice, hero["id"]) == []


async def test_participant_from_another_world_is_bad_request(client, alice):
    home = await create_world(client, alice, "Home")
    away = await create_world(client, alice, "Away")
    stranger = await create_entity(client, alice, away["id"])

    res = await client.post(
        f"/api/v1/worlds/{home['id']}/events",
        json={"name": "Duel", "participant_ids": [stranger["id"]]},
        headers=alice,
    )
    assert res.status_code == 400


async def test_non_event_cannot_have_participants(client, alice):
    world = await create_world(client, alice)
    hero = await create_entity(client, alice, world["id"])
    res = await client.post(
        f"/api/v1/worlds/{world['id']}/things",
        json={"name": "Sword", "participant_ids": [hero["id"]]},
        headers=alice,
    )
    assert res.status_code == 400


async def test_updating_participants_moves_the_event(client, alice):
    world = await create_world(client, alice)
    a = await create_entity(client, alice, world["id"], name="A")
    b = await create_entity(client, alice, world["id"], name="B")
    evt = await create_event(client, alice, world["id"], [a["id"]], 1)

    res = await client.put(
        f"/api/v1/worlds/{world['id']}/events/{evt['id']}",
        json={"participant_ids": [b["id"]]}, headers=alice,
    )
    assert res.status_code == 200
    assert res.json()["participant_ids"] == [b["id"]]
    assert await _timeline(client, alice, a["id"]) == []
    assert await _timeline(client, alice, b["id"]) == [evt["id"]]


async def test_deleting_participant_drops_it_from_events(client, alice):
    world = await create_world(client, alice)
    a = await create_entity(client, alice, world["id"], name="A")
    b = await create_entity(client, alice, world["id"], name="B")
    evt = await create_event(client, alice, world["id"], [a["id"], b["id"]], 1)

    res = await client.delete(
        f"/api/v1/worlds/{world['id']}/characters/{a['id']}", headers=alice,
    )
    assert res.status_code == 204

    event = await client.get(
        f"/api/v1/worlds/{world['id']}/events/{evt['id']}", headers=alice,
    )
    assert event.json()["participant_ids"] == [b["id"]]
    assert await _timeline(client, alice, b["id"]) == [evt["id"]]


async def test_deleting_event_clears_timelines(client, alice):
    world = await create_world(client, alice)
    a = await create_entity(client, alice, world["id"])
    evt = await create_event(client, alice, world["id"], [a["id"]], 1)

    res = await client.delete(
        f"/api/v1/worlds/{world['id']}/events/{evt['id']}", headers=alice,
    )
    assert res.status_code == 204
    assert await _timeline(client, alice, a["id"]) == []


async def test_foreign_and_unknown_entity_timelines_are_not_found(
    client, alice, bob,
):
    world = await create_world(client, alice)
    hero = await create_entity(client, alice, world["id"])
    await create_event(client, alice, world["id"], [hero["id"]], 1)

    foreign = await client.get(f"/api/v1/entity-events/{hero['id']}", headers=bob)
    unknown = await client.get(
        f"/api/v1/entity-events/{create_id(IdPrefix.PLACE)}", headers=alice,
    )
    assert foreign.status_code == unknown.status_code == 404
    assert foreign.json() == unknown.json() == {
        "message": "Entity not found", "code": "NOT_FOUND",
    }


async def test_malformed_entity_id_is_bad_request(client, alice):
    res = await client.get("/api/v1/entity-events/not-an-id", headers=alice)
    assert res.status_code == 400
    assert res.json()["code"] == "BAD_REQUEST"

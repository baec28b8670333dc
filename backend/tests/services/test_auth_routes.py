"""Authentication — every data route requires a valid Bearer token.

Invariants:
    - No header, wrong scheme, bad signature, expired token, missing or oversized
      sub -> 401
    - 401 body has the standard {"message", "code"} shape
"""

import time

import jwt
import pytest

from imagix.api.auth import MAX_SUBJECT_LENGTH
from tests.services.api_helpers import make_token


@pytest.mark.parametrize("path", [
    "/api/v1/worlds",
    "/api/v1/user-stories",
    "/api/v1/entity-relationships/chr_01hzy3k2m8q4v6w8x0y2z4a6b8",
    "/api/v1/entity-events/chr_01hzy3k2m8q4v6w8x0y2z4a6b8",
])
async def test_missing_token_is_unauthenticated(client, path):
    res = await client.get(path)
    assert res.status_code == 401
    assert res.json() == {
        "message": "Authentication required", "code": "UNAUTHENTICATED",
    }


async def test_non_bearer_scheme_is_unauthenticated(client):
    res = await client.get(
        "/api/v1/worlds", headers={"Authorization": "Basic dXNlcjpwYXNz"},
    )
    assert res.status_code == 401


async def test_wrong_signature_is_unauthenticated(client):
    token = jwt.encode(
        {"sub": "user-alice"}, "another-secret-0123456789abcdefgh",
        algorithm="HS256",
    )
    res = await client.get(
        "/api/v1/worlds", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid token"


async def test_expired_token_is_unauthenticated(client):
    token = make_token("user-alice", exp=int(time.time()) - 60)
    res = await client.get(
        "/api/v1/worlds", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["message"] == "Token has expired"


async def test_token_without_subject_is_unauthenticated(client):
    token = make_token(None, name="nobody")
    res = await client.get(
        "/api/v1/worlds", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401


async def test_oversized_subject_is_unauthenticated(client):
    token = make_token("u" * (MAX_SUBJECT_LENGTH + 1))
    res = await client.post(
        "/api/v1/worlds", json={"name": "Aerth"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json() == {
        "message": "Token subject is too long", "code": "UNAUTHENTICATED",
    }


async def test_longest_subject_can_create_worlds(client):
    token = make_token("u" * MAX_SUBJECT_LENGTH)
    res = await client.post(
        "/api/v1/worlds", json={"name": "Aerth"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 201


async def test_valid_token_reaches_route(client, alice):
    res = await client.get("/api/v1/worlds", headers=alice)
    assert res.status_code == 200
    assert res.json() == []

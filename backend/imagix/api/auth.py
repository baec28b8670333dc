"""Authentication — Bearer JWT -> RequestContext, the only source of user identity.

Invariants:
    - Missing header, non-Bearer scheme, undecodable token, missing `sub` or a `sub`
      longer than MAX_SUBJECT_LENGTH -> 401
    - user_id is the token's `sub` claim; no route accepts a user id from the client
    - With AUTH_JWT_SECRET set, signature and expiry (and audience when configured)
      are verified; without it the token is only decoded

Design Decisions:
    - Unverified decode mode exists for deployments behind an API gateway authorizer
      that has already verified the token
    - get_request_context is declared before get_db in every handler dependency, so
      unauthenticated requests never open a database session
"""

import logging

import jwt
from fastapi import Header

from imagix.config import get_settings
from imagix.core.domain_types import UserId
from imagix.core.errors import AuthenticationError
from imagix.core.request_context import RequestContext

logger = logging.getLogger(__name__)

_BEARER = "bearer"

# Owner index keys embed the subject; see Item.gsi1pk.
MAX_SUBJECT_LENGTH = 100


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != _BEARER or not token.strip():
        raise AuthenticationError("Authorization header must be 'Bearer <token>'")
    return token.strip()


def decode_token(token: str) -> dict:
    """Claims of token, verified when a secret is configured."""
    settings = get_settings()
    try:
        if not settings.auth_jwt_secret:
            return jwt.decode(token, options={"verify_signature": False})
        return jwt.decode(
            token, settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options={"verify_aud": settings.auth_jwt_audience is not None},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidAudienceError:
        raise AuthenticationError("Token audience mismatch")
    except jwt.PyJWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise AuthenticationError("Invalid token")


async def get_request_context(
    authorization: str | None = Header(None),
) -> RequestContext:
    """FastAPI dependency: authenticated caller or 401."""
    claims = decode_token(extract_bearer_token(authorization))
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise AuthenticationError("Token has no subject")
    if len(sub) > MAX_SUBJECT_LENGTH:
        raise AuthenticationError("Token subject is too long")
    return RequestContext(user_id=UserId(sub))

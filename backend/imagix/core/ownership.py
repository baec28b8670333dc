"""Ownership — pure predicate behind every authorization decision.

Invariants:
    - A missing world and a world owned by someone else are indistinguishable to the caller
    - The resource_type in the raised error is chosen by the caller, so an entity lookup
      through a foreign world reports "Entity not found", never "World not found"
"""

from typing import Protocol, TypeVar

from imagix.core.errors import NotFoundError


class Owned(Protocol):
    user_id: str


T = TypeVar("T", bound=Owned)


def is_owned_by(resource: Owned | None, user_id: str) -> bool:
    return resource is not None and resource.user_id == user_id


def ensure_owned(resource: T | None, user_id: str, resource_type: str) -> T:
    """Return resource when user_id owns it, else raise NotFoundError(resource_type)."""
    if resource is None or not is_owned_by(resource, user_id):
        raise NotFoundError(resource_type)
    return resource

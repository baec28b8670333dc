"""Relationship Rules — pure validation of relationship endpoints and validity windows.

Invariants:
    - A relationship never points from an entity to itself
    - Both endpoints must be entity ids (character, thing, event or place)
    - valid_until > valid_from whenever both are set
    - An ended relationship cannot be ended again; an open one cannot be reopened

Design Decisions:
    - Raise BadRequestError directly: handlers have nothing to add to the message
"""

from imagix.core.domain_types import ENTITY_PREFIXES
from imagix.core.errors import BadRequestError
from imagix.core.ids import has_prefix


def check_endpoints(from_id: str, to_id: str) -> None:
    for field, value in (("from_id", from_id), ("to_id", to_id)):
        if not has_prefix(value, *ENTITY_PREFIXES):
            raise BadRequestError(f"{field} is not a valid entity id")
    if from_id == to_id:
        raise BadRequestError("A relationship cannot connect an entity to itself")


def check_validity_window(valid_from: int | None, valid_until: int | None) -> None:
    if valid_from is not None and valid_until is not None and valid_until <= valid_from:
        raise BadRequestError("valid_until must be later than valid_from")


def check_can_end(
    valid_from: int | None, current_until: int | None, new_until: int,
) -> None:
    if current_until is not None:
        raise BadRequestError("Relationship has already ended")
    check_validity_window(valid_from, new_until)


def check_can_reopen(current_until: int | None) -> None:
    if current_until is None:
        raise BadRequestError("Relationship has not ended")

"""Event Rules — pure validation of event participants.

Invariants:
    - Only events carry a time and participants; other kinds must leave both unset
    - A participant is a character, thing or place id, never another event
    - A participant appears at most once per event
"""

from imagix.core.domain_types import PARTICIPANT_PREFIXES, EntityKind
from imagix.core.errors import BadRequestError
from imagix.core.ids import has_prefix


def check_event_fields(
    kind: EntityKind, time: int | None, participant_ids: list[str],
) -> None:
    if kind != EntityKind.EVENT:
        if time is not None or participant_ids:
            raise BadRequestError(
                f"A {kind.value} cannot have a time or participants",
            )
        return
    for pid in participant_ids:
        if not has_prefix(pid, *PARTICIPANT_PREFIXES):
            raise BadRequestError(f"'{pid}' is not a valid participant id")
    if len(set(participant_ids)) != len(participant_ids):
        raise BadRequestError("participant_ids contains duplicates")


def participant_changes(
    before: list[str], after: list[str],
) -> tuple[list[str], list[str]]:
    """(added, removed) participant ids, each in the order given."""
    added = [p for p in after if p not in before]
    removed = [p for p in before if p not in after]
    return added, removed

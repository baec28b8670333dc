"""Listing — deterministic ordering and merging of stored records.

Invariants:
    - Every list returned by the API is ordered by (created_at, id), except
      entity timelines, which are ordered by world time first
    - merge_relationship_views never returns the same relationship id twice
    - Output depends only on input contents, not on input order
"""

from datetime import datetime
from typing import Iterable, Protocol, TypeVar


class Listed(Protocol):
    id: str
    created_at: datetime


T = TypeVar("T", bound=Listed)


def creation_order(records: Iterable[T]) -> list[T]:
    return sorted(records, key=lambda r: (r.created_at, r.id))


def merge_relationship_views(outgoing: Iterable[T], incoming: Iterable[T]) -> list[T]:
    """Merge the source-indexed and target-indexed views of one entity's edges."""
    by_id: dict[str, T] = {}
    for rel in (*outgoing, *incoming):
        by_id.setdefault(rel.id, rel)
    return creation_order(by_id.values())


class Timed(Listed, Protocol):
    time: int | None


E = TypeVar("E", bound=Timed)


def timeline_order(events: Iterable[E]) -> list[E]:
    """Events by world time; undated events last, ties by (created_at, id)."""
    return sorted(
        events,
        key=lambda e: (e.time is None, e.time or 0, e.created_at, e.id),
    )

"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - WorldId, EntityId, RelationshipId, StoryId, ChapterId, UserId wrap str ids
    - Every id kind has exactly one 3-letter prefix (IdPrefix)
    - EntityKind <-> IdPrefix <-> URL collection mapping is total and one-to-one

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
WorldId = NewType("WorldId", str)
EntityId = NewType("EntityId", str)
RelationshipId = NewType("RelationshipId", str)
StoryId = NewType("StoryId", str)
ChapterId = NewType("ChapterId", str)


# ─── Enums ───────────────────────────────────────────────────────

class IdPrefix(str, Enum):
    """Type prefix carried by every generated identifier."""
    WORLD = "wld"
    CHARACTER = "chr"
    THING = "thg"
    EVENT = "evt"
    PLACE = "plc"
    RELATIONSHIP = "rel"
    STORY = "sty"
    CHAPTER = "chp"


class EntityKind(str, Enum):
    """Kinds of world entity that can take part in relationships."""
    CHARACTER = "character"
    THING = "thing"
    EVENT = "event"
    PLACE = "place"

    @property
    def id_prefix(self) -> IdPrefix:
        return _KIND_PREFIX[self]

    @property
    def collection(self) -> str:
        """Plural URL segment, e.g. 'characters'."""
        return f"{self.value}s"


class EntityCollection(str, Enum):
    """URL collection names accepted under /worlds/{world_id}/."""
    CHARACTERS = "characters"
    THINGS = "things"
    EVENTS = "events"
    PLACES = "places"

    @property
    def kind(self) -> EntityKind:
        return EntityKind(self.value[:-1])


_KIND_PREFIX = {
    EntityKind.CHARACTER: IdPrefix.CHARACTER,
    EntityKind.THING: IdPrefix.THING,
    EntityKind.EVENT: IdPrefix.EVENT,
    EntityKind.PLACE: IdPrefix.PLACE,
}

ENTITY_PREFIXES = frozenset(_KIND_PREFIX.values())

# Entities an event can list as participants.
PARTICIPANT_PREFIXES = ENTITY_PREFIXES - {IdPrefix.EVENT}

"""Single-Table Key Layout — the only module that knows how records map to pk/sk.

Invariants:
    - World-scoped records live in the WORLD#<id> partition
    - Entity and story partitions hold a #META pointer to their world plus index items
    - Every item carries an ItemType discriminator in its item_type column
    - Sort-key prefixes never overlap: querying one prefix never returns another type

Layout:
    WORLD#<wid>   #META           world        gsi1: USER#<uid> / WORLD#<wid>
    WORLD#<wid>   CHAR#<eid>      character
    WORLD#<wid>   THING#<eid>     thing
    WORLD#<wid>   EVT#<eid>       event
    WORLD#<wid>   PLACE#<eid>     place
    WORLD#<wid>   REL#<rid>       relationship
    WORLD#<wid>   STORY#<sid>     story        gsi1: USER#<uid> / STORY#<sid>
    ENTITY#<eid>  #META           entity_ref   -> world_id
    ENTITY#<eid>  REL_FROM#<rid>  rel_from     entity is the source
    ENTITY#<eid>  REL_TO#<rid>    rel_to       entity is the target
    ENTITY#<eid>  EVT#<evid>      event_ref    entity takes part in the event
    STORY#<sid>   #META           story_ref    -> world_id
    STORY#<sid>   CHAP#<cid>      chapter
"""

from imagix.core.domain_types import EntityKind


class ItemType:
    WORLD = "world"
    CHARACTER = "character"
    THING = "thing"
    EVENT = "event"
    PLACE = "place"
    RELATIONSHIP = "relationship"
    ENTITY_REF = "entity_ref"
    REL_FROM = "rel_from"
    REL_TO = "rel_to"
    EVENT_REF = "event_ref"
    STORY = "story"
    STORY_REF = "story_ref"
    CHAPTER = "chapter"


class Prefix:
    WORLD = "WORLD#"
    ENTITY = "ENTITY#"
    STORY = "STORY#"
    USER = "USER#"
    CHAR = "CHAR#"
    THING = "THING#"
    EVT = "EVT#"
    PLACE = "PLACE#"
    REL = "REL#"
    REL_FROM = "REL_FROM#"
    REL_TO = "REL_TO#"
    CHAP = "CHAP#"


META_SK = "#META"

_ENTITY_SK_PREFIX = {
    EntityKind.CHARACTER: Prefix.CHAR,
    EntityKind.THING: Prefix.THING,
    EntityKind.EVENT: Prefix.EVT,
    EntityKind.PLACE: Prefix.PLACE,
}

ENTITY_ITEM_TYPES = frozenset(kind.value for kind in EntityKind)


def world_pk(world_id: str) -> str:
    return f"{Prefix.WORLD}{world_id}"


def entity_pk(entity_id: str) -> str:
    return f"{Prefix.ENTITY}{entity_id}"


def story_pk(story_id: str) -> str:
    return f"{Prefix.STORY}{story_id}"


def user_gsi1pk(user_id: str) -> str:
    return f"{Prefix.USER}{user_id}"


def world_gsi1sk(world_id: str) -> str:
    return f"{Prefix.WORLD}{world_id}"


def entity_sk_prefix(kind: EntityKind) -> str:
    return _ENTITY_SK_PREFIX[kind]


def entity_sk(kind: EntityKind, entity_id: str) -> str:
    return f"{_ENTITY_SK_PREFIX[kind]}{entity_id}"


def entity_item_type(kind: EntityKind) -> str:
    return kind.value


def relationship_sk(rel_id: str) -> str:
    return f"{Prefix.REL}{rel_id}"


def rel_from_sk(rel_id: str) -> str:
    return f"{Prefix.REL_FROM}{rel_id}"


def rel_to_sk(rel_id: str) -> str:
    return f"{Prefix.REL_TO}{rel_id}"


def event_ref_sk(event_id: str) -> str:
    return f"{Prefix.EVT}{event_id}"


def story_sk(story_id: str) -> str:
    return f"{Prefix.STORY}{story_id}"


def chapter_sk(chapter_id: str) -> str:
    return f"{Prefix.CHAP}{chapter_id}"

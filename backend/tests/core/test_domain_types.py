"""Domain Types — verifies id prefixes and the kind/collection mapping.

Tests:
    - Every entity kind maps to one id prefix and one URL collection, both ways
    - Enums serialize to their string values
"""

from imagix.core.domain_types import (
    ENTITY_PREFIXES, PARTICIPANT_PREFIXES, EntityCollection, EntityKind,
    IdPrefix,
)


def test_id_prefixes_are_three_letters_and_unique():
    values = [p.value for p in IdPrefix]
    assert all(len(v) == 3 for v in values)
    assert len(set(values)) == len(values)


def test_entity_kind_prefixes():
    assert EntityKind.CHARACTER.id_prefix == IdPrefix.CHARACTER
    assert EntityKind.THING.id_prefix == IdPrefix.THING
    assert EntityKind.EVENT.id_prefix == IdPrefix.EVENT
    assert EntityKind.PLACE.id_prefix == IdPrefix.PLACE
    assert ENTITY_PREFIXES == {
        IdPrefix.CHARACTER, IdPrefix.THING, IdPrefix.EVENT, IdPrefix.PLACE,
    }


def test_events_cannot_take_part_in_events():
    assert IdPrefix.EVENT not in PARTICIPANT_PREFIXES
    assert PARTICIPANT_PREFIXES < ENTITY_PREFIXES


def test_collection_and_kind_are_inverse():
    for kind in EntityKind:
        assert EntityCollection(kind.collection).kind == kind
    for collection in EntityCollection:
        assert collection.kind.collection == collection.value


def test_enums_are_strings():
    assert EntityKind.EVENT == "event"
    assert IdPrefix.WORLD == "wld"
    assert EntityCollection.PLACES.kind == "place"

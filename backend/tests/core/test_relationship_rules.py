"""Relationship Rules — endpoint and validity-window validation.

Tests:
    - Endpoints must be distinct entity ids
    - valid_until must follow valid_from
    - end / reopen only from the matching state
"""

import pytest

from imagix.core.domain_types import IdPrefix
from imagix.core.errors import BadRequestError
from imagix.core.ids import create_id
from imagix.core.relationship_rules import (
    check_can_end, check_can_reopen, check_endpoints, check_validity_window,
)


def test_distinct_entity_endpoints_pass():
    check_endpoints(create_id(IdPrefix.CHARACTER), create_id(IdPrefix.EVENT))


def test_self_loop_rejected():
    same = create_id(IdPrefix.THING)
    with pytest.raises(BadRequestError):
        check_endpoints(same, same)


@pytest.mark.parametrize("bad", [
    create_id(IdPrefix.WORLD), create_id(IdPrefix.STORY), "chr_short",
])
def test_non_entity_endpoint_rejected(bad):
    with pytest.raises(BadRequestError) as exc:
        check_endpoints(create_id(IdPrefix.CHARACTER), bad)
    assert "to_id" in exc.value.message


def test_validity_window():
    check_validity_window(None, None)
    check_validity_window(5, None)
    check_validity_window(None, 5)
    check_validity_window(5, 6)
    with pytest.raises(BadRequestError):
        check_validity_window(5, 5)
    with pytest.raises(BadRequestError):
        check_validity_window(5, 4)


def test_end_only_open_relationships():
    check_can_end(None, None, 10)
    with pytest.raises(BadRequestError):
        check_can_end(None, 10, 20)
    with pytest.raises(BadRequestError):
        check_can_end(30, None, 20)


def test_reopen_only_ended_relationships():
    check_can_reopen(10)
    with pytest.raises(BadRequestError):
        check_can_reopen(None)

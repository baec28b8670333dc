"""Chapter Order — append, remove and reorder of chapter id lists."""

import pytest

from imagix.core import chapter_order
from imagix.core.errors import BadRequestError


def test_append_keeps_ids_unique():
    assert chapter_order.append(["a", "b"], "c") == ["a", "b", "c"]
    assert chapter_order.append(["a", "b"], "a") == ["b", "a"]


def test_remove_missing_is_noop():
    assert chapter_order.remove(["a", "b"], "a") == ["b"]
    assert chapter_order.remove(["a", "b"], "z") == ["a", "b"]


def test_reorder_accepts_permutation():
    assert chapter_order.reorder(["a", "b", "c"], ["c", "a", "b"]) == [
        "c", "a", "b",
    ]


@pytest.mark.parametrize("requested", [
    ["a", "b"], ["a", "b", "c", "d"], ["a", "a", "b"], ["a", "b", "z"],
])
def test_reorder_rejects_other_sets(requested):
    with pytest.raises(BadRequestError):
        chapter_order.reorder(["a", "b", "c"], requested)

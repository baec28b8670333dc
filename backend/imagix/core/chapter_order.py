"""Chapter Order — pure list operations on a story's ordered chapter ids.

Invariants:
    - Story.chapter_ids never contains duplicates
    - reorder() accepts only a permutation of the current ids
"""

from imagix.core.errors import BadRequestError


def append(chapter_ids: list[str], chapter_id: str) -> list[str]:
    return [*[c for c in chapter_ids if c != chapter_id], chapter_id]


def remove(chapter_ids: list[str], chapter_id: str) -> list[str]:
    return [c for c in chapter_ids if c != chapter_id]


def reorder(current: list[str], requested: list[str]) -> list[str]:
    if len(set(requested)) != len(requested):
        raise BadRequestError("chapter_ids contains duplicates")
    if set(requested) != set(current):
        raise BadRequestError("chapter_ids must contain exactly the story's chapters")
    return list(requested)

"""Identifiers — prefixed ULIDs: `pfx_` + 26 Crockford base32 characters.

Invariants:
    - Every id is exactly 30 characters: 3-letter prefix, '_', 10 time chars, 16 random chars
    - Time chars encode milliseconds since the Unix epoch, so ids sort by creation time
      at millisecond resolution
    - Alphabet is lowercase Crockford base32 (no i, l, o, u)

Design Decisions:
    - Generated server-side only; clients never choose ids
    - Validation is pure and used at the route boundary to turn junk ids into 400s
"""

import re
import secrets
import time

from imagix.core.domain_types import IdPrefix

ENCODING = "0123456789abcdefghjkmnpqrstvwxyz"
_DECODING = {c: i for i, c in enumerate(ENCODING)}

ID_LENGTH = 30
PREFIX_LENGTH = 3
_TIME_CHARS = 10
_RANDOM_CHARS = 16

_ID_RE = re.compile(r"^[a-z]{3}_[0-9a-hjkmnp-tv-z]{26}$")


def _encode(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        chars.append(ENCODING[value & 0x1F])
        value >>= 5
    return "".join(reversed(chars))


def create_id(prefix: IdPrefix, timestamp_ms: int | None = None) -> str:
    """Create a new prefixed ULID."""
    ts = int(time.time() * 1000) if timestamp_ms is None else timestamp_ms
    randomness = int.from_bytes(secrets.token_bytes(10), "big")
    return (
        f"{prefix.value}_"
        f"{_encode(ts, _TIME_CHARS)}{_encode(randomness, _RANDOM_CHARS)}"
    )


def is_valid_id(value: str) -> bool:
    return len(value) == ID_LENGTH and bool(_ID_RE.match(value))


def has_prefix(value: str, *prefixes: IdPrefix) -> bool:
    """True when value is a well-formed id carrying one of the prefixes."""
    return is_valid_id(value) and value[:PREFIX_LENGTH] in {
        p.value for p in prefixes
    }


def extract_timestamp(value: str) -> int:
    """Milliseconds encoded in the time part of an id."""
    ts = 0
    for char in value[PREFIX_LENGTH + 1:PREFIX_LENGTH + 1 + _TIME_CHARS]:
        ts = ts * 32 + _DECODING.get(char, 0)
    return ts

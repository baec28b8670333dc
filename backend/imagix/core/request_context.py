"""Request Context — the authenticated caller, passed explicitly into every handler.

Invariants:
    - user_id comes only from a verified credential (api/auth.py), never from a
      client-supplied parameter
    - Immutable for the lifetime of a request
"""

from dataclasses import dataclass

from imagix.core.domain_types import UserId


@dataclass(frozen=True)
class RequestContext:
    user_id: UserId

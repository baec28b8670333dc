"""Services Layer — access guard and per-resource handlers.

Invariants:
    - Every handler takes (repository, RequestContext) and calls AccessGuard first
    - Handlers see records and ids only; key layout stays in infrastructure/

Design Decisions:
    - One handler file per resource for locality (ADR: ExMA no god objects)
"""

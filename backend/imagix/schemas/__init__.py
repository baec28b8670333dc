"""Pydantic Schemas — shared record types and request bodies.

Invariants:
    - Record models (World, Entity, Relationship, Story, Chapter) are what the API
      returns and what the store persists as item data
    - *Create / *Update models validate client input at the system boundary

Design Decisions:
    - One module per aggregate; records and bodies side by side, as the routes and
      handlers always need both
"""

"""Infrastructure Layer — storage adapter, database sessions and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every store failure surfaces as StoreError; no driver exception escapes

Design Decisions:
    - keys.py / item_store.py / repository.py split: key layout, raw item IO and
      record translation each live in one place
"""

"""Item Store — key/item operations over the single table, with conditional writes.

Invariants:
    - transact_write applies every op or none (one DB transaction, rollback on any failure)
    - Conditions are evaluated against the row as locked inside that transaction
      (SELECT ... FOR UPDATE where the dialect supports it)
    - A failed condition raises the op's on_fail error, or ConditionFailedError
    - Every SQLAlchemy failure surfaces as StoreError; nothing driver-specific leaks
    - Queries return items ordered by sort key (sk, or gsi1sk for the index)

Design Decisions:
    - Ops as small dataclasses (Put / Delete / Check) mirror a transactional
      write-items API, so the repository reads the same whatever the backing store
    - flush() after each op: later ops in the same batch see earlier ones
    - Cascades pass a `then` builder: it runs after the leading ops have locked their
      rows, so the dependents it enumerates are read inside the same transaction
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imagix.core.errors import ConditionFailedError, ImagixError, StoreError
from imagix.models.item import Item

logger = logging.getLogger(__name__)


@dataclass
class StoredItem:
    pk: str
    sk: str
    item_type: str
    data: dict[str, Any]
    gsi1pk: str | None = None
    gsi1sk: str | None = None


@dataclass
class Condition:
    """exists=True: item must exist; exists=False: must not; equals implies exists."""
    exists: bool | None = None
    equals: dict[str, Any] = field(default_factory=dict)
    on_fail: ImagixError | None = None

    def holds(self, row: Item | None) -> bool:
        if self.exists is False:
            return row is None
        if row is None:
            return not (self.exists or self.equals)
        return all(row.data.get(k) == v for k, v in self.equals.items())


@dataclass
class Put:
    item: StoredItem
    condition: Condition | None = None


@dataclass
class Delete:
    pk: str
    sk: str
    condition: Condition | None = None


@dataclass
class Check:
    pk: str
    sk: str
    condition: Condition


WriteOp = Put | Delete | Check
OpsBuilder = Callable[[], Awaitable[Sequence[WriteOp]]]


def _to_stored(row: Item) -> StoredItem:
    return StoredItem(
        pk=row.pk, sk=row.sk, item_type=row.item_type, data=dict(row.data),
        gsi1pk=row.gsi1pk, gsi1sk=row.gsi1sk,
    )


class SqlItemStore:
    """Item store backed by one SQLAlchemy table and the request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, pk: str, sk: str) -> StoredItem | None:
        try:
            row = await self._db.get(Item, (pk, sk))
        except SQLAlchemyError as e:
            logger.error(f"Store get failed: {e}")
            raise StoreError("Item lookup failed", "get")
        return _to_stored(row) if row else None

    async def query(self, pk: str, sk_prefix: str = "") -> list[StoredItem]:
        """All items in partition pk whose sk starts with sk_prefix."""
        stmt = select(Item).where(Item.pk == pk)
        if sk_prefix:
            stmt = stmt.where(Item.sk.startswith(sk_prefix, autoescape=True))
        return await self._run_query(stmt.order_by(Item.sk), "query")

    async def query_index(
        self, gsi1pk: str, gsi1sk_prefix: str = "",
    ) -> list[StoredItem]:
        """All items with gsi1pk whose gsi1sk starts with gsi1sk_prefix."""
        stmt = select(Item).where(Item.gsi1pk == gsi1pk)
        if gsi1sk_prefix:
            stmt = stmt.where(
                Item.gsi1sk.startswith(gsi1sk_prefix, autoescape=True),
            )
        return await self._run_query(stmt.order_by(Item.gsi1sk), "query_index")

    async def transact_write(
        self, ops: Sequence[WriteOp], then: OpsBuilder | None = None,
    ) -> None:
        """Apply ops atomically, in order.

        When then is given it is awaited once ops have been applied, and the ops it
        returns are applied in the same transaction. Its reads see the store as of
        the locks ops took.
        """
        try:
            for op in ops:
                await self._apply(op)
            if then is not None:
                self._db.expire_all()
                for op in await then():
                    await self._apply(op)
            await self._db.commit()
        except ImagixError:
            await self._db.rollback()
            raise
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Store transaction failed: {e}")
            raise StoreError("Transactional write failed", "transact_write")

    async def _run_query(self, stmt, operation: str) -> list[StoredItem]:
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError("Item query failed", operation)
        return [_to_stored(row) for row in result.scalars().all()]

    async def _locked(self, pk: str, sk: str) -> Item | None:
        return await self._db.get(
            Item, (pk, sk), with_for_update=True, populate_existing=True,
        )

    async def _apply(self, op: WriteOp) -> None:
        if isinstance(op, Put):
            key = (op.item.pk, op.item.sk)
        else:
            key = (op.pk, op.sk)
        row = await self._locked(*key)
        if op.condition and not op.condition.holds(row):
            raise op.condition.on_fail or ConditionFailedError(*key)

        if isinstance(op, Put):
            if row is None:
                self._db.add(Item(
                    pk=op.item.pk, sk=op.item.sk, item_type=op.item.item_type,
                    gsi1pk=op.item.gsi1pk, gsi1sk=op.item.gsi1sk,
                    data=dict(op.item.data),
                ))
            else:
                row.item_type = op.item.item_type
                row.gsi1pk = op.item.gsi1pk
                row.gsi1sk = op.item.gsi1sk
                row.data = dict(op.item.data)
        elif isinstance(op, Delete) and row is not None:
            await self._db.delete(row)
        await self._db.flush()

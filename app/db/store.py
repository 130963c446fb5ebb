# app/db/store.py
"""
Entity store adapter.

A thin document-style API (find/insert/update-with-upsert/count) over the
SQLAlchemy tables in app.db.schema. Services receive an EntityStore
instance instead of reaching for module-level handles, so tests can hand
them a store bound to an in-memory database.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from sqlalchemy import and_, func, select, true
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.deadline import Deadline
from app.db.schema import COLLECTIONS
from app.errors import NotFoundError, OperationTimeoutError, StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

# SQLite VM instructions between deadline checks inside a statement
PROGRESS_INTERVAL = 1000


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    upserted: bool = False


def where_clause(table, filters: Optional[Mapping[str, Any]]):
    """Equality filter over `table`; an empty filter matches everything."""
    if not filters:
        return true()
    return and_(*[table.c[field] == value for field, value in filters.items()])


@contextmanager
def _interrupt_when_expired(conn: Connection, deadline: Optional[Deadline]) -> Iterator[None]:
    """
    Abort a running statement once `deadline` expires.

    Only drivers with a progress hook (sqlite3) support this; elsewhere the
    deadline is still checked before every statement.
    """
    driver_conn = conn.connection.driver_connection if deadline is not None else None
    set_handler = getattr(driver_conn, "set_progress_handler", None)
    if set_handler is None:
        yield
        return

    # a non-zero return makes SQLite interrupt the current statement
    set_handler(lambda: 1 if deadline.expired() else 0, PROGRESS_INTERVAL)
    try:
        yield
    finally:
        set_handler(None, PROGRESS_INTERVAL)


def _to_document(row) -> Document:
    doc = dict(row)
    doc.pop("id", None)
    return doc


class EntityStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def collection(self, name: str):
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    @contextmanager
    def _connect(
        self,
        operation: str,
        deadline: Optional[Deadline] = None,
        write: bool = False,
    ) -> Iterator[Connection]:
        if deadline is not None:
            deadline.check(operation)
        try:
            opener = self._engine.begin if write else self._engine.connect
            with opener() as conn:
                with _interrupt_when_expired(conn, deadline):
                    yield conn
        except SQLAlchemyError as exc:
            if deadline is not None and deadline.expired():
                logger.error("Store call %s interrupted: time budget exhausted", operation)
                raise OperationTimeoutError(
                    f"{operation} exceeded its {deadline.seconds:g}s time budget"
                ) from exc
            logger.error("Store call %s failed: %s", operation, exc)
            raise StoreError(f"{operation} failed: {exc}") from exc

    # ---- Reads ----

    def find_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        deadline: Optional[Deadline] = None,
    ) -> Optional[Document]:
        table = self.collection(collection)
        stmt = select(table).where(where_clause(table, filters)).limit(1)

        with self._connect(f"find_one({collection})", deadline) as conn:
            row = conn.execute(stmt).mappings().first()

        return _to_document(row) if row is not None else None

    def find_many(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
        deadline: Optional[Deadline] = None,
    ) -> List[Document]:
        """
        Records matching `filters`, oldest first (created_at, then insertion).
        """
        table = self.collection(collection)
        stmt = (
            select(table)
            .where(where_clause(table, filters))
            .order_by(table.c.created_at.asc(), table.c.id.asc())
        )
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        with self._connect(f"find_many({collection})", deadline) as conn:
            rows = conn.execute(stmt).mappings().all()

        return [_to_document(row) for row in rows]

    def find_in(
        self,
        collection: str,
        field: str,
        values: Iterable[Any],
        deadline: Optional[Deadline] = None,
    ) -> List[Document]:
        """Records whose `field` is any of `values` (lookup side of a join)."""
        wanted = [v for v in set(values) if v is not None]
        if not wanted:
            return []

        table = self.collection(collection)
        stmt = (
            select(table)
            .where(table.c[field].in_(wanted))
            .order_by(table.c.id.asc())
        )

        with self._connect(f"find_in({collection}.{field})", deadline) as conn:
            rows = conn.execute(stmt).mappings().all()

        return [_to_document(row) for row in rows]

    def count(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        deadline: Optional[Deadline] = None,
    ) -> int:
        table = self.collection(collection)
        stmt = (
            select(func.count())
            .select_from(table)
            .where(where_clause(table, filters))
        )

        with self._connect(f"count({collection})", deadline) as conn:
            return conn.execute(stmt).scalar_one()

    # ---- Writes ----

    def insert_one(
        self,
        collection: str,
        document: Mapping[str, Any],
        deadline: Optional[Deadline] = None,
    ) -> Document:
        table = self.collection(collection)

        with self._connect(f"insert_one({collection})", deadline, write=True) as conn:
            conn.execute(table.insert().values(**document))

        return dict(document)

    def insert_many(
        self,
        collection: str,
        documents: List[Mapping[str, Any]],
        deadline: Optional[Deadline] = None,
    ) -> List[Document]:
        if not documents:
            return []

        table = self.collection(collection)

        # Single transaction: either every document is stored or none is
        with self._connect(f"insert_many({collection})", deadline, write=True) as conn:
            conn.execute(table.insert(), [dict(doc) for doc in documents])

        return [dict(doc) for doc in documents]

    def update_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        values: Mapping[str, Any],
        upsert: bool = False,
        deadline: Optional[Deadline] = None,
    ) -> UpdateResult:
        """
        Set `values` on the first record matching `filters`.

        With upsert=True and no match, a record made of filters + values is
        inserted instead.
        """
        table = self.collection(collection)

        with self._connect(f"update_one({collection})", deadline, write=True) as conn:
            target = conn.execute(
                select(table.c.id)
                .where(where_clause(table, filters))
                .order_by(table.c.id.asc())
                .limit(1)
            ).scalar_one_or_none()

            if target is not None:
                conn.execute(
                    table.update().where(table.c.id == target).values(**values)
                )
                return UpdateResult(matched_count=1)

            if not upsert:
                return UpdateResult(matched_count=0)

            document = {**filters, **values}
            # an upserted record is created now
            if "created_at" not in document and "updated_at" in document:
                document["created_at"] = document["updated_at"]
            conn.execute(table.insert().values(**document))
            logger.info("Upserted new %s record for %s", collection, dict(filters))
            return UpdateResult(matched_count=0, upserted=True)

    def require_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        entity: str,
        deadline: Optional[Deadline] = None,
    ) -> Document:
        """find_one that raises NotFoundError instead of returning None."""
        doc = self.find_one(collection, filters, deadline=deadline)
        if doc is None:
            entity_id = next(iter(filters.values()), None) if len(filters) == 1 else None
            logger.warning("%s not found for %s", entity, dict(filters))
            raise NotFoundError(entity, entity_id)
        return doc

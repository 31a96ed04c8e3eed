# services/crud/visit.py
from datetime import datetime, timezone
from typing import Callable, List

from sqlalchemy import delete, select as sa_select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from blort.models.visit import OrderBy, VisitRecord, VisitResult
from blort.services.errors import InvalidInput, RegistryError, translate_db_error
from blort.services.logging.logging import get_logger

logger = get_logger(logger_name=__name__)

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VisitRegistry:
    """
    Durable mapping name -> (visit count, last seen time).

    The registry keeps no state of its own: every call is a fresh round trip
    to the store behind ``engine``, so it is safe to share one instance
    between threads and requests.
    """

    def __init__(self, engine: Engine, clock: Callable[[], datetime] = utc_now):
        dialect = engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise ValueError(f"Unsupported database dialect: {dialect}")
        self.engine = engine
        self.clock = clock
        self._insert = _UPSERT_INSERTS[dialect]

    def record_visit(self, name: str) -> VisitResult:
        """
        Records one visit for ``name`` and returns the state before it.

        The prior row is read under a row lock and the write is a single
        insert-or-increment statement, both in one transaction, so the
        stored counter grows by exactly one per call.

        Args:
            name: Visitor name, case-sensitive

        Returns:
            VisitResult: Previous count and last seen time, (0, None) on a first visit

        Raises:
            InvalidInput: name is empty or cannot be stored
            StoreUnavailable: the store failed; nothing was written
            ConstraintViolation: the store rejected the write
        """
        _check_name(name)
        table = VisitRecord.__table__
        now = self.clock()

        prior_statement = (
            sa_select(table.c["count"], table.c.last_seen)
            .where(table.c.name == name)
            .with_for_update()
        )
        insert_statement = self._insert(table).values(name=name, count=1, last_seen=now)
        upsert_statement = insert_statement.on_conflict_do_update(
            index_elements=[table.c.name],
            set_={
                "count": table.c["count"] + 1,
                "last_seen": insert_statement.excluded.last_seen,
            },
        ).returning(table.c["count"])

        try:
            with self.engine.begin() as connection:
                prior = connection.execute(prior_statement).first()
                new_count = connection.execute(upsert_statement).scalar_one()
        except SQLAlchemyError as e:
            raise self._failed("record visit", e) from e

        if prior is None:
            logger.info(f"First visit recorded for {name!r}")
            return VisitResult()

        previous_count, previous_last_seen = prior
        logger.debug(f"Visit recorded for {name!r}: {previous_count} -> {new_count}")
        return VisitResult(previous_count=previous_count, previous_last_seen=previous_last_seen)

    def list_top(self, limit: int, order_by: OrderBy) -> List[VisitRecord]:
        """
        Returns up to ``limit`` records, most recent or most visited first.

        Args:
            limit: Maximum number of records, must be positive
            order_by: OrderBy.LAST_SEEN or OrderBy.VISITS

        Returns:
            List[VisitRecord]: Ordered records, empty when nothing was recorded yet
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidInput(f"limit must be a positive integer, got {limit!r}")

        if order_by is OrderBy.LAST_SEEN:
            sort_key = VisitRecord.last_seen
        elif order_by is OrderBy.VISITS:
            sort_key = VisitRecord.count
        else:
            raise InvalidInput(f"Unknown ordering: {order_by!r}")

        statement = (
            select(VisitRecord)
            .order_by(sort_key.desc(), VisitRecord.name)
            .limit(limit)
        )
        try:
            with Session(self.engine) as session:
                return list(session.exec(statement).all())
        except SQLAlchemyError as e:
            raise self._failed("list names", e) from e

    def clear_all(self) -> None:
        """Removes every record. Clearing an empty registry is a no-op."""
        try:
            with self.engine.begin() as connection:
                result = connection.execute(delete(VisitRecord.__table__))
        except SQLAlchemyError as e:
            raise self._failed("clear names", e) from e
        logger.info(f"Cleared {result.rowcount} name(s)")

    def _failed(self, action: str, error: SQLAlchemyError) -> RegistryError:
        failure = translate_db_error(error)
        logger.error(f"Failed to {action}: {failure}")
        return failure


def _check_name(name: str) -> None:
    if not isinstance(name, str):
        raise InvalidInput(f"name must be a string, got {type(name).__name__}")
    if not name:
        raise InvalidInput("name must not be empty")
    if "\x00" in name:
        raise InvalidInput("name must not contain NUL characters")

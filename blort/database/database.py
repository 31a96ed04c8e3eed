from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from blort.database.config import get_settings
from blort.services.crud.visit import VisitRegistry
from blort.services.logging.logging import get_logger

# Registers the tables on SQLModel.metadata
import blort.models  # noqa: F401

logger = get_logger(logger_name=__name__)


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Creates the pooled engine shared by every registry call.

    Args:
        url: SQLAlchemy database URL
        echo: Log SQL statements
        **kwargs: Extra create_engine arguments (tests pass poolclass here)

    Returns:
        Engine: Configured engine
    """
    if make_url(url).get_backend_name() != "sqlite":
        return create_engine(url, echo=echo, pool_pre_ping=True,
                             pool_size=5, max_overflow=10, **kwargs)

    # SQLite: shared between threads, writers wait on each other
    connect_args = kwargs.pop("connect_args", {})
    connect_args.setdefault("check_same_thread", False)
    connect_args.setdefault("timeout", 30)
    engine = create_engine(url, echo=echo, connect_args=connect_args, **kwargs)
    _serialize_sqlite_transactions(engine)
    return engine


def _serialize_sqlite_transactions(engine: Engine) -> None:
    # Every transaction holds the write lock from BEGIN to COMMIT
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")


def init_db(engine: Engine) -> None:
    """Creates the schema if it does not exist yet."""
    logger.info("Creating database schema...")
    SQLModel.metadata.create_all(engine)


@lru_cache()
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.DATABASE_URL_psycopg, echo=settings.DB_ECHO)


def get_registry() -> VisitRegistry:
    return VisitRegistry(get_engine())

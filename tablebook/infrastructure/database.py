from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import Engine, create_engine, event, func, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from tablebook.core.errors import StoreError, StoreNotInitializedError

logger = logging.getLogger(__name__)

Base = declarative_base()

# (table_number, capacity) pairs written on first start when the floor plan is empty
DEFAULT_TABLES: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 12),
    (3, 6),
    (4, 4),
    (5, 5),
    (6, 4),
    (7, 4),
    (8, 2),
    (9, 2),
    (10, 20),
)


def _serialize_sqlite_transactions(engine: Engine) -> None:
    """
    Make every SQLite transaction take the write lock up front (BEGIN IMMEDIATE).

    pysqlite's own deferred BEGIN is switched off so SQLAlchemy controls it. Two sessions
    running check-then-insert on the same slot are therefore serialized: the second one
    waits for the first to commit and then sees its booking.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Explicit handle on the record store.

    Constructed by the composition root and passed to whatever needs sessions. Nothing
    touches the engine until `initialize()` runs; until then `session()` raises
    `StoreNotInitializedError`.
    """

    def __init__(self, url: str, *, busy_timeout: float = 5.0) -> None:
        self._url = make_url(url)
        self._busy_timeout = busy_timeout
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def initialized(self) -> bool:
        return self._session_factory is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StoreNotInitializedError("Database has not been initialized")
        return self._engine

    def initialize(self, *, reset: bool = False, seed_tables: Iterable[tuple[int, int]] = ()) -> None:
        """
        Create the engine and schema, optionally wiping existing data first, then seed
        tables if the floor plan is empty. Calling it again is a no-op.
        """
        if self.initialized:
            return

        from tablebook.infrastructure.models import models  # registers mapped classes on Base

        try:
            engine = self._build_engine()
            if reset:
                logger.warning("Dropping all data in %s", self._url.render_as_string(hide_password=True))
                Base.metadata.drop_all(bind=engine)
            Base.metadata.create_all(bind=engine)

            factory = sessionmaker(bind=engine)
            with factory() as db:
                if db.scalar(select(func.count()).select_from(models.TableModel)) == 0:
                    rows = [models.TableModel(table_number=n, capacity=c) for n, c in seed_tables]
                    if rows:
                        db.add_all(rows)
                        logger.info("Seeded %d tables", len(rows))
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Could not initialize database: {e}") from e

        self._engine = engine
        self._session_factory = factory
        logger.info("Database ready at %s", self._url.render_as_string(hide_password=True))

    def session(self) -> Session:
        if self._session_factory is None:
            raise StoreNotInitializedError("Database has not been initialized")
        return self._session_factory()

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def _build_engine(self) -> Engine:
        if self._url.get_backend_name() != "sqlite":
            return create_engine(self._url, isolation_level="SERIALIZABLE")

        kwargs = {}
        if self._url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

        engine = create_engine(
            self._url,
            connect_args={"check_same_thread": False, "timeout": self._busy_timeout},
            **kwargs,
        )
        _serialize_sqlite_transactions(engine)
        return engine

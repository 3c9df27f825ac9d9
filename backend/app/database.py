import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    # Avoid stale idle connections causing first-hit failures after inactivity
    kwargs: dict = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # SQLite uses a per-process connection; pass connect_args and avoid pool sizing
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 15}
    else:
        kwargs.update(
            {
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
            }
        )
    return kwargs


def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    try:
        # WAL improves read concurrency; NORMAL reduces fsync pressure.
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
        # Back off rather than instantly failing on transient locks (ms)
        cursor.execute("PRAGMA busy_timeout=60000;")
    finally:
        cursor.close()


class Database:
    """Store handle owning the engine and session factory.

    Created once per process, connected on application startup and closed on
    shutdown. Request handlers and engine functions only ever see sessions.
    """

    def __init__(self, url: Optional[str] = None) -> None:
        self.url = url or settings.SQLALCHEMY_DATABASE_URL
        self.engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> "Database":
        if self.engine is not None:
            return self
        self.engine = create_engine(self.url, **_engine_kwargs(self.url))
        if self.url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_sqlite_pragma)
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("database.connect dialect=%s", self.engine.dialect.name)
        return self

    def create_schema(self) -> None:
        # Import models so every table is registered on Base.metadata
        from app import models  # noqa: F401

        if self.engine is None:
            raise RuntimeError("Database is not connected")
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        logger.info("database.close")
        self.engine = None
        self._sessionmaker = None


# Dependency
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Commit the enclosed writes as one transaction, rolling back on error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise

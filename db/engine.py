"""
db.engine - Engine and session factory for the contact database.

init_db() may be called again with another URL (CLI commands, tests);
the previous engine is disposed first.  Sessions never expire objects on
commit: the importer commits once per row and keeps using the records
it already loaded.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

_engine = None
_SessionLocal: sessionmaker | None = None

_SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys=ON",
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=5000",
)


def init_db(db_url: str) -> None:
    """(Re)create the engine for *db_url* and make sure all tables exist."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(db_url, echo=False)

    if db_url.startswith("sqlite"):
        @event.listens_for(_engine, "connect")
        def _apply_sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            for pragma in _SQLITE_PRAGMAS:
                cur.execute(pragma)
            cur.close()

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)


def get_session() -> Session:
    """Return a new session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session closed on exit.  Commit and rollback stay with the caller."""
    session = get_session()
    try:
        yield session
    finally:
        session.close()

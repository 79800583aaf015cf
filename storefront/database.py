"""Database connection and session factory.

Columns use UTCDateTime so naive datetimes loaded from the database come
back tagged as UTC, preventing naive-vs-aware comparison errors. SQLite is
the default for local runs and gets a Unicode-aware lower() so catalog search
folds case the same way on every backend; PostgreSQL sessions are pinned to
UTC on connect.
"""

import sqlite3
from datetime import timezone

from sqlalchemy import create_engine, event, DateTime, TypeDecorator
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import settings


class UTCDateTime(TypeDecorator):
    """DateTime type that ensures UTC timezone on load."""
    impl = DateTime
    cache_ok = True

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@event.listens_for(engine, "connect")
def _set_timezone(dbapi_conn, connection_record):
    if engine.dialect.name != "postgresql":
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("SET timezone = 'UTC'")
    cursor.close()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_conn, connection_record):
    """Replace SQLite's ASCII-only lower() with Python's str.lower on every engine."""
    if isinstance(dbapi_conn, sqlite3.Connection):
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""
Database configuration and session management
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from typing import Generator
from fastapi import Request
import logging

logger = logging.getLogger(__name__)


def _build_engine(url: str, echo: bool = False, ssl: bool = False) -> Engine:
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection or every session sees an empty database
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Enable ON DELETE CASCADE for SQLite"""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    connect_args = {"sslmode": "require"} if ssl else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=10,
        max_overflow=20,
        echo=echo,
        connect_args=connect_args,
    )


class Database:
    """
    Owns the engine (and its connection pool) for one application instance.

    Created at startup by the app factory and disposed on shutdown, so tests
    can build an isolated instance per app.
    """

    def __init__(self, url: str, echo: bool = False, ssl: bool = False):
        self.engine = _build_engine(url, echo=echo, ssl=ssl)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            expire_on_commit=False  # Keep objects accessible after commit
        )

        if echo:
            @event.listens_for(self.engine, "checkout")
            def receive_checkout(dbapi_connection, connection_record, connection_proxy):
                """Log when connection is checked out from pool"""
                logger.debug("Connection checked out from pool")

            @event.listens_for(self.engine, "checkin")
            def receive_checkin(dbapi_connection, connection_record):
                """Log when connection is returned to pool"""
                logger.debug("Connection returned to pool")

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Transactional scope: commit on success, roll back on any error,
        always return the connection to the pool
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency to get database session
    """
    database: Database = request.app.state.db
    db = database.SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

# =============================================================================
# lib/database.py - Database Handle
# =============================================================================
# This module wraps the SQLAlchemy engine and session factory in a single
# Database object. One instance is built when the API starts, shared by every
# request through FastAPI dependency injection, and disposed on shutdown.
#
# Usage:
#   db = Database("sqlite:///./data/database.db")
#   db.create_all()
#   with db.session() as session:
#       session.add(row)
#       session.commit()
#   db.dispose()
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from lib.tables import Base

# Set up logging for this module
logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when the database handle cannot be created."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = self.message
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-wide handle on the relational store.

    Owns the engine (and with it the connection pool). Façades receive
    this object and open one short-lived session per operation.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        try:
            parsed = make_url(url)
        except Exception as e:
            raise DatabaseError(
                f"Invalid database URL: {e}",
                suggestion="Check DATABASE_URL in your .env file",
            )

        self.is_sqlite = parsed.get_backend_name() == "sqlite"
        connect_args = {}

        if self.is_sqlite:
            # Requests run in FastAPI's threadpool
            connect_args["check_same_thread"] = False
            if parsed.database and parsed.database != ":memory:":
                Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine: Engine = create_engine(url, echo=echo, connect_args=connect_args)

        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created ({parsed.get_backend_name()})")

    def create_all(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Open a session that is always closed, rolling back on error.

        Commits are left to the caller.
        """
        session = self._session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Run a trivial query; used by the readiness check."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.info("Database engine disposed")

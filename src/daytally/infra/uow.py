"""
This is the canonical Unit of Work boundary for DayTally. All transactional changes must go through this.

Both the CLI and the HTTP API open sessions here so that a snapshot read,
the engine computation and the collection write commit or roll back together.
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from sqlalchemy.orm import Session

from . import db as db_module


@contextlib.contextmanager
def session() -> Generator[Session, None, None]:
    """
    Database session context manager for CLI operations.

    Provides Unit of Work semantics:
    - Opens a DB session
    - Yields it for use
    - On success: commits the transaction
    - On exception: rolls back and re-raises the exception
    - Always closes the session

    Usage:
        with session() as db:
            snapshot = load_snapshot(db)
            replace_entries(db, new_entries)
    """
    db = db_module.SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency generator for database sessions.

    Same Unit of Work semantics as session(), as a generator for Depends().
    """
    db = db_module.SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

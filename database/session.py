"""
Database session management utilities.
Provides context managers for database sessions.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session

from database.base import SessionLocal
from database.manager import get_engine


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Database session context manager bound to the shared engine.

    Raises DatabaseStateError if the engine has not been initialized.

    Usage:
        with get_db_context() as db:
            db.add(article)
            db.commit()
    """
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

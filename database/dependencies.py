"""
FastAPI dependency injection for database sessions.
"""

from typing import Generator

import logfire
from sqlalchemy.orm import Session

from database.base import SessionLocal
from database.manager import get_engine


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Usage:
        @app.get("/articles")
        def list_articles(db: Session = Depends(get_db)):
            ...

    The session is closed after the request, returning its connection
    to the pool.
    """
    db = SessionLocal(bind=get_engine())
    logfire.debug("Database session opened")
    try:
        yield db
    finally:
        db.close()
        logfire.debug("Database session closed")

"""
Declarative base and session factory for consumers of the shared engine.

No engine is created here: sessions bind to the engine owned by
database.manager at the moment they are opened.
"""

from sqlalchemy.orm import declarative_base, sessionmaker

# Unbound session factory; callers pass bind=get_engine()
SessionLocal = sessionmaker(autoflush=False)

# Create declarative base for ORM models
Base = declarative_base()

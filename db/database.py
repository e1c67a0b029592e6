"""
Database connection and session management.
"""
import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from db.models import Base

# Database file path (relative to project root, stored in db folder)
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///db/wordle_results.db')

# Create engine
engine = create_engine(DATABASE_URL, echo=False)

# Create session factory
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def bind_engine(url: str):
    """Point the session factory at another database."""
    global engine
    if engine.url.render_as_string(hide_password=False) != url:
        engine.dispose()
        engine = create_engine(url, echo=False)
        SessionLocal.configure(bind=engine)
    return engine


@contextmanager
def get_db():
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database():
    """Initialize database tables."""
    Base.metadata.create_all(engine)

"""
Database session management.

Provides SQLModel engine and session creation.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from app.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    pool_pre_ping=True,   # Verify connections before using
    pool_size=5,
    max_overflow=10,
)


@contextmanager
def get_session(bind: Optional[Engine] = None) -> Iterator[Session]:
    """
    Session on *bind* (the configured engine by default), closed on exit.

    Example:
        with get_session() as session:
            BenchmarkService(session).get_current_zones(athlete_id)
    """
    with Session(bind if bind is not None else engine) as session:
        yield session

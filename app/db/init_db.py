"""
Database initialization.

Creates all tables of the engine.
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """Create every SQLModel table on *engine* (the configured one by default)."""
    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    if engine is None:
        from app.db.session import engine

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created: %s", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    from app.core.logging import setup_logging

    setup_logging()
    init_db()

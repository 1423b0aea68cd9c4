"""
Unit of work.

Every multi-row mutation of the engine runs inside one :class:`UnitOfWork`:
repositories only ``flush``, the unit commits once on a clean exit and
rolls back everything on any exception, so a failure in the middle of a
benchmark swap, a progression update or a trend emission leaves the
stored state unchanged.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.exceptions import StateConsistencyError

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Transaction boundary over a SQLModel session.

    Usage::

        with UnitOfWork(session):
            repo.demote_current(athlete_id)
            repo.insert_current(record)
    """

    def __init__(self, session: Session):
        self.session = session

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.session.rollback()
            return False

        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise StateConsistencyError(f"commit rejected by a uniqueness constraint: {e.orig}") from e
        except Exception:
            self.session.rollback()
            raise
        return False

"""Transaction utilities for explicit transaction boundaries."""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(session: Session) -> Generator[Session]:
    """Commit on successful completion, roll back on any exception.

    Example:
        with transaction(session):
            booking_repo.create(...)
            route_cache_repo.save(...)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise

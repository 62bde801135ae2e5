import contextlib
import logging
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from database.store import DocumentStore

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


@contextlib.contextmanager
def store_uow(session_factory: Optional[SessionFactory] = None) -> Iterator[DocumentStore]:
    """Per-unit-of-work transaction scope.

    Yields a DocumentStore bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with store_uow() as store:
            application = store.get('applications', application_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    if session_factory is None:
        from database.database import SessionLocal
        session_factory = SessionLocal

    session = session_factory()
    try:
        yield DocumentStore(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

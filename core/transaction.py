import contextlib
import logging
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from core.exceptions import StoreConflict
from database.store import DocumentStore
from database.uow import SessionFactory, store_uow

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def transaction(session_factory: Optional[SessionFactory] = None) -> Iterator[DocumentStore]:
    """
    store_uow() that turns store failures into StoreConflict.

    Domain exceptions raised inside the block pass through unchanged (after
    rollback). Anything SQLAlchemy raises, including optimistic version
    mismatches at flush/commit, is logged and surfaced as StoreConflict so
    callers can retry the whole operation.
    """
    try:
        with store_uow(session_factory) as store:
            yield store
    except StaleDataError as e:
        logger.warning(f"Concurrent modification detected, transaction rolled back: {e}")
        raise StoreConflict("The record was changed by another request, please try again") from e
    except SQLAlchemyError as e:
        logger.error(f"Store error, transaction rolled back: {e}", exc_info=True)
        raise StoreConflict("The operation could not be completed, please try again") from e

from contextlib import contextmanager
import logging

import sqlalchemy.exc as sa_exc
from sqlalchemy.orm import Session

from ..errors import StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_access(session: Session, operation: str):
    """
    Run a block of store I/O, translating driver failures into StoreUnavailable.

    Uniqueness violations pass through untouched: the allocator treats those as
    collisions. Anything else rolls the session back and is not retried.
    """
    try:
        yield
    except sa_exc.IntegrityError:
        raise
    except sa_exc.DBAPIError as exc:
        logger.warning(f"Store failure during {operation}: {exc.orig!r}")
        session.rollback()
        raise StoreUnavailable(operation, exc) from exc

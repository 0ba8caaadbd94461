import logging

import sqlalchemy as sa
import sqlalchemy.orm as so

from ..helpers.store import store_access
from .formats import IdFormat

logger = logging.getLogger(__name__)


def scan_id_space(session: so.Session, column: sa.ColumnElement, id_format: IdFormat) -> list[int]:
    """
    Read every identifier in ``column`` and return the numbers in use, ascending.

    Rows that do not fit ``id_format`` (wrong prefix, non-numeric suffix, out of
    range) are left out. Sorting happens here rather than in SQL because a text
    ORDER BY puts ORD10 before ORD9.
    """
    stmt = sa.select(column)
    if not id_format.is_integer:
        stmt = stmt.where(column.like(f"{id_format.prefix}%"))

    with store_access(session, f"scan of {column}"):
        raw_values = session.execute(stmt).scalars().all()

    numbers = {n for n in (id_format.parse(v) for v in raw_values) if n is not None}
    skipped = len(raw_values) - len(numbers)
    if skipped:
        logger.debug(f"Ignored {skipped} malformed or out-of-range value(s) in {column}")
    return sorted(numbers)


def identifier_exists(session: so.Session, column: sa.ColumnElement, identifier) -> bool:
    stmt = sa.select(column).where(column == identifier).limit(1)
    with store_access(session, f"lookup of {identifier!r} in {column}"):
        return session.execute(stmt).first() is not None

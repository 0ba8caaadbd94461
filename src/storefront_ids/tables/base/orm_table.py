import sqlalchemy as sa
import sqlalchemy.orm as so
from typing import Any, ClassVar, Type, TypeVar, cast
import logging

from ...sequences import AllocationResult, IdSequence, IdStatistics, SequenceAllocator

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="SequencedTableBase")


class ORMTableBase:
    """
    Mixin for SQLAlchemy ORM-mapped tables providing:

    - primary key introspection
    - mapper access
    """

    __abstract__ = True

    @classmethod
    def mapper_for(cls: Type) -> so.Mapper:
        mapper = sa.inspect(cls)
        if not mapper:
            raise TypeError(f"{cls.__name__} is not a mapped ORM class")
        return cast(so.Mapper, mapper)

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]:
        pks = list(cls.mapper_for().primary_key)
        if not pks:
            raise ValueError(f"{cls.__name__} has no primary key")
        return pks


class SequencedTableBase(ORMTableBase):
    """
    Mixin for tables whose identifier column is filled by a ``SequenceAllocator``.

    Subclasses set ``__sequence__``; the named column must be unique (a primary key
    or a unique constraint), since the constraint is what resolves concurrent inserts.
    """

    __abstract__ = True
    __sequence__: ClassVar[IdSequence]

    @classmethod
    def sequence_column(cls) -> sa.Column:
        seq = getattr(cls, "__sequence__", None)
        if seq is None:
            raise TypeError(f"{cls.__name__} does not declare __sequence__")
        column = cls.mapper_for().local_table.c[seq.column]
        # part of a composite key is not unique on its own
        sole_pk = [c.name for c in cls.pk_columns()] == [column.name]
        if not (sole_pk or column.unique):
            logger.warning(
                f"{cls.__name__}.{seq.column} has no unique constraint; concurrent allocation may duplicate ids"
            )
        return cast(sa.Column, column)

    @classmethod
    def allocator(cls) -> SequenceAllocator:
        cls.sequence_column()
        return SequenceAllocator(cls, cls.__sequence__)  # type: ignore[arg-type]

    @classmethod
    def next_identifier(cls, session: so.Session) -> AllocationResult:
        return cls.allocator().next_id(session)

    @classmethod
    def identifier_exists(cls, session: so.Session, identifier: Any) -> bool:
        return cls.allocator().exists(session, identifier)

    @classmethod
    def id_statistics(cls, session: so.Session) -> IdStatistics:
        return cls.allocator().statistics(session)

    @classmethod
    def create(cls: Type[T], session: so.Session, **values: Any) -> T:
        """Insert a new row under a freshly allocated identifier and commit."""
        column = cls.__sequence__.column
        if column in values:
            raise ValueError(f"{cls.__name__}.{column} is allocated, do not pass it explicitly")

        row, _ = cls.allocator().insert_with_id(
            session,
            lambda identifier: cls(**{column: identifier}, **values),
        )
        return row

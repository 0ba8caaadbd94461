from typing import Protocol, ClassVar, runtime_checkable, TYPE_CHECKING, Any, Type, TypeVar
import sqlalchemy.orm as so
import sqlalchemy as sa

if TYPE_CHECKING:
    from ...sequences import AllocationResult, IdSequence, IdStatistics, SequenceAllocator

T = TypeVar("T")


@runtime_checkable
class ORMTableProtocol(Protocol):
    """
    Structural protocol for ORM-mapped *table classes*.
    """

    __tablename__: ClassVar[str]
    __table__: ClassVar[sa.Table]
    metadata: ClassVar[sa.MetaData]

    @classmethod
    def mapper_for(cls) -> so.Mapper: ...

    @classmethod
    def pk_columns(cls) -> list[sa.ColumnElement]: ...


@runtime_checkable
class SequencedTableProtocol(ORMTableProtocol, Protocol):
    """
    Protocol for ORM tables whose rows carry an allocated, human-readable identifier.
    """

    __sequence__: ClassVar["IdSequence"]

    @classmethod
    def sequence_column(cls) -> sa.Column: ...

    @classmethod
    def allocator(cls) -> "SequenceAllocator": ...

    @classmethod
    def next_identifier(cls, session: so.Session) -> "AllocationResult": ...

    @classmethod
    def identifier_exists(cls, session: so.Session, identifier: Any) -> bool: ...

    @classmethod
    def id_statistics(cls, session: so.Session) -> "IdStatistics": ...

    @classmethod
    def create(cls: Type[T], session: so.Session, **values: Any) -> T: ...

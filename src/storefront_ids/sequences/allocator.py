from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterator, Optional, Type, TypeVar, TYPE_CHECKING
import json
import logging

import sqlalchemy as sa
import sqlalchemy.exc as sa_exc
import sqlalchemy.orm as so

from ..errors import ExhaustedRetries, StoreUnavailable, TransientCollision
from ..helpers.store import store_access
from .formats import IdFormat
from .policies import CollisionStrategy, NextIdPolicy, next_candidate
from .scanner import identifier_exists, scan_id_space
from .statistics import IdStatistics, compute_statistics

if TYPE_CHECKING:
    from ..tables.base.typing import SequencedTableProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class IdSequence:
    """
    Per-entity allocation settings.

    ``fallback`` is only consulted by ``SequenceAllocator.next_id`` when the store
    cannot be read at all; results produced by it are flagged ``degraded``.
    """

    name: str
    column: str
    id_format: IdFormat
    policy: NextIdPolicy = NextIdPolicy.SEQUENTIAL
    on_collision: CollisionStrategy = CollisionStrategy.RESCAN
    max_attempts: int = 5
    fallback: Optional[Callable[[], int]] = field(default=None, compare=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"{self.name}: max_attempts must be at least 1")

    def with_options(self, **changes: Any) -> "IdSequence":
        return replace(self, **changes)


@dataclass(frozen=True)
class AllocationResult:
    sequence: str
    number: int
    identifier: Any
    attempts: int = 1
    degraded: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "data": {
                "sequence": self.sequence,
                "id": self.identifier,
                "number": self.number,
                "attempts": self.attempts,
                "degraded": self.degraded,
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class SequenceAllocator:
    """
    Allocates the next identifier of an ``IdSequence`` stored in ``model``.

    Every call re-reads the identifier column; nothing is cached between calls.
    Concurrent callers are not locked out. The existence check narrows the race,
    and the column's unique constraint settles it on insert.
    """

    def __init__(self, model: Type["SequencedTableProtocol"], sequence: IdSequence):
        self.model = model
        self.sequence = sequence
        table = model.__table__
        if sequence.column not in table.c:
            raise ValueError(
                f"{model.__name__} has no column '{sequence.column}' for sequence '{sequence.name}'"
            )
        self.column: sa.Column = table.c[sequence.column]

    def scan(self, session: so.Session) -> list[int]:
        existing = scan_id_space(session, self.column, self.sequence.id_format)
        logger.debug(f"{self.sequence.name}: {len(existing)} identifier(s) in use")
        return existing

    def exists(self, session: so.Session, identifier: Any) -> bool:
        return identifier_exists(session, self.column, identifier)

    def is_available(self, session: so.Session, identifier: Any) -> bool:
        return not self.exists(session, identifier)

    def statistics(self, session: so.Session, range_size: int = 10) -> IdStatistics:
        return compute_statistics(self.scan(session), range_size=range_size)

    def _candidates(self, session: so.Session) -> Iterator[tuple[int, int]]:
        seq = self.sequence
        candidate: Optional[int] = None
        for attempt in range(1, seq.max_attempts + 1):
            if candidate is None or seq.on_collision is CollisionStrategy.RESCAN:
                candidate = next_candidate(self.scan(session), seq.policy)
            else:
                candidate += 1
            seq.id_format.check_bounds(candidate, seq.name)
            yield attempt, candidate

    def _verify(self, session: so.Session, candidate: int) -> Any:
        identifier = self.sequence.id_format.render(candidate)
        if self.exists(session, identifier):
            raise TransientCollision(self.sequence.name, identifier)
        return identifier

    def _insert(self, session: so.Session, identifier: Any, build: Callable[[Any], T]) -> T:
        row = build(identifier)
        session.add(row)
        try:
            with store_access(session, f"insert of {identifier!r}"):
                session.commit()
        except sa_exc.IntegrityError:
            session.rollback()
            # some other unique column may have failed; only our own id counts as a collision
            if self.exists(session, identifier):
                raise TransientCollision(self.sequence.name, identifier)
            raise
        return row

    def _allocate(
        self,
        session: so.Session,
        build: Optional[Callable[[Any], T]] = None,
    ) -> tuple[Optional[T], AllocationResult]:
        last: Optional[TransientCollision] = None
        attempts = 0
        for attempt, candidate in self._candidates(session):
            attempts = attempt
            try:
                identifier = self._verify(session, candidate)
                row = self._insert(session, identifier, build) if build is not None else None
            except TransientCollision as exc:
                logger.warning(f"{exc}, retrying (attempt {attempt}/{self.sequence.max_attempts})")
                last = exc
                continue
            logger.info(f"{self.sequence.name}: allocated {identifier!r} after {attempt} attempt(s)")
            return row, AllocationResult(
                sequence=self.sequence.name,
                number=candidate,
                identifier=identifier,
                attempts=attempt,
            )
        raise ExhaustedRetries(self.sequence.name, attempts) from last

    def next_id(self, session: so.Session) -> AllocationResult:
        """Return the next free identifier without inserting it."""
        try:
            _, result = self._allocate(session)
        except StoreUnavailable as exc:
            if self.sequence.fallback is None:
                raise
            return self._degraded(exc)
        return result

    def insert_with_id(self, session: so.Session, build: Callable[[Any], T]) -> tuple[T, AllocationResult]:
        """
        Allocate an identifier and persist ``build(identifier)`` under it.

        Commits on success. A uniqueness violation on the identifier column is rolled
        back and retried like any other collision. There is no degraded fallback here:
        a row written under a best-effort id would defeat the unique constraint.
        """
        row, result = self._allocate(session, build)
        return row, result  # type: ignore[return-value]

    def _degraded(self, cause: StoreUnavailable) -> AllocationResult:
        assert self.sequence.fallback is not None
        number = self.sequence.fallback()
        identifier = self.sequence.id_format.render(number)
        logger.warning(
            f"{self.sequence.name}: store unavailable ({cause.operation}), "
            f"issuing degraded identifier {identifier!r}"
        )
        return AllocationResult(
            sequence=self.sequence.name,
            number=number,
            identifier=identifier,
            attempts=0,
            degraded=True,
        )

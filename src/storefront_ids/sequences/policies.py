from enum import Enum
from typing import Sequence


class NextIdPolicy(Enum):
    SEQUENTIAL = "sequential"
    GAP_FILLING = "gap_filling"


class CollisionStrategy(Enum):
    """What to do with a candidate that turned out to be taken."""

    INCREMENT = "increment"
    RESCAN = "rescan"


def next_sequential(existing: Sequence[int]) -> int:
    if not existing:
        return 1
    return max(existing) + 1


def first_gap(existing: Sequence[int]) -> int:
    """Smallest positive integer not in ``existing``; ``max + 1`` when the run is dense."""
    used = set(existing)
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


def next_candidate(existing: Sequence[int], policy: NextIdPolicy) -> int:
    if policy is NextIdPolicy.SEQUENTIAL:
        return next_sequential(existing)
    if policy is NextIdPolicy.GAP_FILLING:
        return first_gap(existing)
    raise ValueError(f"Unknown next-id policy: {policy!r}")

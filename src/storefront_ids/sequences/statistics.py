from dataclasses import dataclass, asdict
from typing import Any, Sequence
import json
import math

from .policies import first_gap, next_sequential


@dataclass(frozen=True)
class IdStatistics:
    """
    Read-only summary of an identifier space.

    ``next_available`` is what gap filling would hand out; ``next_sequential`` is what
    the allocators actually hand out. The two differ whenever ``gaps`` is non-empty.
    """

    total: int
    min_id: int
    max_id: int
    gaps: tuple[int, ...] = ()
    next_available: int = 1
    next_sequential: int = 1
    used_ranges: tuple[int, ...] = ()
    available_ranges: tuple[int, ...] = ()

    @property
    def has_gaps(self) -> bool:
        return bool(self.gaps)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def find_gaps(existing: Sequence[int]) -> list[int]:
    used = set(existing)
    upper = max(used, default=0)
    return [i for i in range(1, upper + 1) if i not in used]


def compute_statistics(existing: Sequence[int], range_size: int = 10) -> IdStatistics:
    ids = sorted(set(existing))
    max_id = ids[-1] if ids else 0

    used_ranges: list[int] = []
    available_ranges: list[int] = []
    max_range = math.ceil(max_id / range_size)
    used_buckets = {math.ceil(i / range_size) for i in ids}
    # one trailing bucket so there is always something to report as available
    for bucket in range(1, max_range + 2):
        if bucket in used_buckets:
            used_ranges.append(bucket)
        else:
            available_ranges.append(bucket)

    return IdStatistics(
        total=len(ids),
        min_id=ids[0] if ids else 0,
        max_id=max_id,
        gaps=tuple(find_gaps(ids)),
        next_available=first_gap(ids),
        next_sequential=next_sequential(ids),
        used_ranges=tuple(used_ranges),
        available_ranges=tuple(available_ranges),
    )

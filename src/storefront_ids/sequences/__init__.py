from .allocator import AllocationResult, IdSequence, SequenceAllocator
from .fallbacks import LocalCounter, timestamp_fallback
from .formats import IdFormat, RangeInfo, range_info
from .policies import CollisionStrategy, NextIdPolicy, first_gap, next_candidate, next_sequential
from .scanner import identifier_exists, scan_id_space
from .statistics import IdStatistics, compute_statistics, find_gaps

__all__ = [
    "AllocationResult",
    "IdSequence",
    "SequenceAllocator",
    "LocalCounter",
    "timestamp_fallback",
    "IdFormat",
    "RangeInfo",
    "range_info",
    "CollisionStrategy",
    "NextIdPolicy",
    "first_gap",
    "next_candidate",
    "next_sequential",
    "identifier_exists",
    "scan_id_space",
    "IdStatistics",
    "compute_statistics",
    "find_gaps",
]

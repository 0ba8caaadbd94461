from .errors import (
    AllocationError,
    TransientCollision,
    ExhaustedRetries,
    RangeExceeded,
    StoreUnavailable,
    InvalidIdentifier,
)
from .sequences import (
    AllocationResult,
    IdFormat,
    IdSequence,
    IdStatistics,
    NextIdPolicy,
    CollisionStrategy,
    SequenceAllocator,
)
from .presets import USER_IDS, ORDER_IDS, NOTIFICATION_IDS
from .config import DatabaseSettings, create_engine, session_factory

__all__ = [
    "AllocationError",
    "TransientCollision",
    "ExhaustedRetries",
    "RangeExceeded",
    "StoreUnavailable",
    "InvalidIdentifier",
    "AllocationResult",
    "IdFormat",
    "IdSequence",
    "IdStatistics",
    "NextIdPolicy",
    "CollisionStrategy",
    "SequenceAllocator",
    "USER_IDS",
    "ORDER_IDS",
    "NOTIFICATION_IDS",
    "DatabaseSettings",
    "create_engine",
    "session_factory",
]

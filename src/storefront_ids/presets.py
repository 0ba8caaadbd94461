"""Identifier sequences used by the storefront tables."""

from .sequences import (
    CollisionStrategy,
    IdFormat,
    IdSequence,
    LocalCounter,
    NextIdPolicy,
    timestamp_fallback,
)

USER_ID_FORMAT = IdFormat(prefix="USR", width=3, max_value=999)
ORDER_ID_FORMAT = IdFormat(prefix="ORD")
NOTIFICATION_ID_FORMAT = IdFormat()

# User ids never reuse gaps left by deleted accounts; statistics report them only.
USER_IDS = IdSequence(
    name="user",
    column="user_id",
    id_format=USER_ID_FORMAT,
    policy=NextIdPolicy.SEQUENTIAL,
    on_collision=CollisionStrategy.INCREMENT,
    max_attempts=100,
)

order_fallback_counter = LocalCounter()

ORDER_IDS = IdSequence(
    name="order",
    column="order_id",
    id_format=ORDER_ID_FORMAT,
    policy=NextIdPolicy.SEQUENTIAL,
    on_collision=CollisionStrategy.RESCAN,
    max_attempts=10,
    fallback=order_fallback_counter,
)

NOTIFICATION_IDS = IdSequence(
    name="notification",
    column="id",
    id_format=NOTIFICATION_ID_FORMAT,
    policy=NextIdPolicy.SEQUENTIAL,
    on_collision=CollisionStrategy.RESCAN,
    max_attempts=5,
    fallback=timestamp_fallback,
)

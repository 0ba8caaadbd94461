"""
Entity-level entry points used by the storefront request handlers.

Each function takes the request's session. Allocation functions return an
``AllocationResult``; ``create_*`` functions insert and commit a row.
"""

from decimal import Decimal
from typing import Optional, Union
import logging

import sqlalchemy.orm as so

from .presets import USER_ID_FORMAT
from .sequences import AllocationResult, IdStatistics, RangeInfo, range_info
from .tables.models import Notification, Order, User

logger = logging.getLogger(__name__)


def generate_user_id(session: so.Session) -> AllocationResult:
    return User.next_identifier(session)


def is_user_id_available(session: so.Session, user_id: str) -> bool:
    return not User.identifier_exists(session, user_id)


def user_id_statistics(session: so.Session) -> IdStatistics:
    return User.id_statistics(session)


def validate_user_id_format(user_id: str) -> bool:
    return USER_ID_FORMAT.matches(user_id)


def extract_user_number(user_id: str) -> int:
    return USER_ID_FORMAT.extract_number(user_id)


def user_range_info(user_id: str, range_size: int = 10) -> RangeInfo:
    return range_info(extract_user_number(user_id), range_size=range_size)


def generate_order_id(session: so.Session) -> AllocationResult:
    return Order.next_identifier(session)


def generate_notification_id(session: so.Session) -> AllocationResult:
    return Notification.next_identifier(session)


def notification_id_exists(session: so.Session, notification_id: int) -> bool:
    return Notification.identifier_exists(session, notification_id)


def notification_id_statistics(session: so.Session) -> IdStatistics:
    return Notification.id_statistics(session)


def create_user(
    session: so.Session,
    *,
    name: str,
    email: str,
    password_hash: Optional[str] = None,
) -> User:
    user = User.create(session, name=name, email=email, password_hash=password_hash)
    logger.info(f"Created user {user.user_id}")
    return user


def create_order(
    session: so.Session,
    *,
    user_id: str,
    total_amount: Union[Decimal, int, str] = Decimal("0"),
    status: str = "pending",
) -> Order:
    order = Order.create(session, user_id=user_id, total_amount=Decimal(total_amount), status=status)
    logger.info(f"Created order {order.order_id} for {user_id}")
    return order


def create_notification(
    session: so.Session,
    *,
    user_id: str,
    notification_type: str,
    title: str,
    message: str,
    is_read: bool = False,
) -> Notification:
    notification = Notification.create(
        session,
        user_id=user_id,
        notification_type=notification_type,
        title=title,
        message=message,
        is_read=is_read,
    )
    logger.info(f"Created notification {notification.id} for {user_id}")
    return notification

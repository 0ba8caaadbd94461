from .base import (
    ORMTableBase,
    SequencedTableBase,
    ORMTableProtocol,
    SequencedTableProtocol,
)
from .models import Base, User, Order, Notification

__all__ = [
    "ORMTableBase",
    "SequencedTableBase",
    "ORMTableProtocol",
    "SequencedTableProtocol",
    "Base",
    "User",
    "Order",
    "Notification",
]

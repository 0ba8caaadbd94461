from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
import sqlalchemy.orm as so

from ..presets import NOTIFICATION_IDS, ORDER_IDS, USER_IDS
from .base.orm_table import SequencedTableBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(so.DeclarativeBase):
    pass


class User(SequencedTableBase, Base):
    __tablename__ = "users"
    __sequence__ = USER_IDS

    user_id: so.Mapped[str] = so.mapped_column(sa.String(16), primary_key=True)
    name: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)
    email: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False, unique=True)
    password_hash: so.Mapped[Optional[str]] = so.mapped_column(sa.String(255), nullable=True)
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime(timezone=True), default=_utcnow)

    orders: so.Mapped[list["Order"]] = so.relationship(back_populates="user")


class Order(SequencedTableBase, Base):
    __tablename__ = "orders"
    __sequence__ = ORDER_IDS

    order_id: so.Mapped[str] = so.mapped_column(sa.String(32), primary_key=True)
    user_id: so.Mapped[str] = so.mapped_column(sa.ForeignKey("users.user_id"), nullable=False)
    total_amount: so.Mapped[Decimal] = so.mapped_column(sa.Numeric(10, 2), nullable=False, default=Decimal("0"))
    status: so.Mapped[str] = so.mapped_column(sa.String(32), nullable=False, default="pending")
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime(timezone=True), default=_utcnow)

    user: so.Mapped[User] = so.relationship(back_populates="orders")


class Notification(SequencedTableBase, Base):
    __tablename__ = "notifications"
    __sequence__ = NOTIFICATION_IDS

    id: so.Mapped[int] = so.mapped_column(sa.Integer, primary_key=True, autoincrement=False)
    user_id: so.Mapped[str] = so.mapped_column(sa.String(16), nullable=False, index=True)
    notification_type: so.Mapped[str] = so.mapped_column("type", sa.String(64), nullable=False)
    title: so.Mapped[str] = so.mapped_column(sa.String(255), nullable=False)
    message: so.Mapped[str] = so.mapped_column(sa.Text, nullable=False)
    is_read: so.Mapped[bool] = so.mapped_column(sa.Boolean, nullable=False, default=False)
    created_at: so.Mapped[datetime] = so.mapped_column(sa.DateTime(timezone=True), default=_utcnow)

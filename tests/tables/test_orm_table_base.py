from sqlalchemy.exc import NoInspectionAvailable
import sqlalchemy as sa
import sqlalchemy.orm as so
import pytest

from storefront_ids.presets import ORDER_IDS
from storefront_ids.tables.base.orm_table import ORMTableBase, SequencedTableBase
from storefront_ids.tables.models import Notification, Order, User

Base = so.declarative_base()


def test_pk_introspection():
    class T(ORMTableBase, Base):
        __tablename__ = "t"
        id = sa.Column(sa.Integer, primary_key=True)

    assert [c.name for c in T.pk_columns()] == ["id"]


def test_pk_missing_raises():
    class T(ORMTableBase):
        __tablename__ = "t"
    with pytest.raises(NoInspectionAvailable):
        T.pk_columns()


def test_storefront_identifier_columns():
    assert User.sequence_column().name == "user_id"
    assert Order.sequence_column().name == "order_id"
    assert Notification.sequence_column().name == "id"
    assert [c.name for c in Notification.pk_columns()] == ["id"]


def test_sequence_declaration_required():
    class Plain(SequencedTableBase, Base):
        __tablename__ = "plain"
        id = sa.Column(sa.Integer, primary_key=True)

    with pytest.raises(TypeError):
        Plain.allocator()


def test_non_unique_sequence_column_warns(caplog):
    class Loose(SequencedTableBase, Base):
        __tablename__ = "loose"
        __sequence__ = ORDER_IDS
        id = sa.Column(sa.Integer, primary_key=True)
        order_id = sa.Column(sa.String(32))

    with caplog.at_level("WARNING"):
        Loose.allocator()

    assert "no unique constraint" in caplog.text


def test_composite_key_member_is_not_unique(caplog):
    class Lines(SequencedTableBase, Base):
        __tablename__ = "lines"
        __sequence__ = ORDER_IDS
        order_id = sa.Column(sa.String(32), primary_key=True)
        line_no = sa.Column(sa.Integer, primary_key=True)

    with caplog.at_level("WARNING"):
        Lines.allocator()

    assert "no unique constraint" in caplog.text


def test_sole_primary_key_is_unique(caplog):
    with caplog.at_level("WARNING"):
        for model in (User, Order, Notification):
            model.allocator()

    assert "no unique constraint" not in caplog.text


def test_create_allocates_identifier(session):
    first = User.create(session, name="Ada", email="ada@example.com")
    second = User.create(session, name="Grace", email="grace@example.com")

    assert (first.user_id, second.user_id) == ("USR001", "USR002")
    assert User.identifier_exists(session, "USR002")
    assert User.next_identifier(session).identifier == "USR003"


def test_create_rejects_explicit_identifier(session):
    with pytest.raises(ValueError):
        User.create(session, user_id="USR050", name="Ada", email="ada@example.com")


def test_id_statistics(session):
    for n in (1, 2, 4):
        session.add(Notification(id=n, user_id="USR001", notification_type="info", title="t", message="m"))
    session.commit()

    stats = Notification.id_statistics(session)
    assert stats.total == 3
    assert stats.gaps == (3,)

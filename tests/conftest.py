import pytest
import sqlalchemy as sa
import sqlalchemy.orm as so
import os
import time

from storefront_ids.tables.models import Base


@pytest.fixture
def engine():
    engine = sa.create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with so.Session(engine) as s:
        yield s


@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite so several threads can hold their own connections."""
    engine = sa.create_engine(
        f"sqlite:///{tmp_path / 'storefront.db'}",
        connect_args={"timeout": 30, "check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


POSTGRES_URL = os.environ.get("STOREFRONT_TEST_PG_URL")


@pytest.fixture(scope="session")
def pg_engine():
    if not POSTGRES_URL:
        pytest.skip("STOREFRONT_TEST_PG_URL not set")

    from sqlalchemy_utils import create_database, database_exists

    last_err = None
    for i in range(10):
        try:
            if not database_exists(POSTGRES_URL):
                create_database(POSTGRES_URL)
            engine = sa.create_engine(POSTGRES_URL)
            with engine.connect() as conn:
                conn.execute(sa.text("select 1"))
            break
        except sa.exc.OperationalError as e:
            last_err = e
            print(f"[{i}] Postgres not ready:", repr(e))
            time.sleep(1)
    else:
        raise RuntimeError(f"Postgres never became available: {last_err!r}")

    yield engine
    engine.dispose()


@pytest.fixture
def pg_session(pg_engine):
    with pg_engine.begin() as conn:
        Base.metadata.drop_all(conn)
        Base.metadata.create_all(conn)

    session = so.Session(pg_engine)
    try:
        yield session
    finally:
        session.rollback()
        session.close()

from concurrent.futures import ThreadPoolExecutor

import pytest
import sqlalchemy as sa

from storefront_ids.config import session_factory
from storefront_ids.presets import NOTIFICATION_IDS, USER_IDS
from storefront_ids.sequences import SequenceAllocator
from storefront_ids.tables.models import Notification, User

WORKERS = 8


def _allocate_notifications(engine, count: int) -> list[int]:
    Session = session_factory(engine)
    allocator = SequenceAllocator(Notification, NOTIFICATION_IDS.with_options(max_attempts=50))

    def worker(i: int) -> int:
        with Session() as s:
            row, result = allocator.insert_with_id(
                s,
                lambda identifier: Notification(
                    id=identifier,
                    user_id="USR001",
                    notification_type="order",
                    title=f"title {i}",
                    message="message",
                ),
            )
            return result.number

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(worker, range(count)))


def test_concurrent_inserts_yield_distinct_ids(file_engine):
    numbers = _allocate_notifications(file_engine, WORKERS)

    assert sorted(numbers) == list(range(1, WORKERS + 1))
    with file_engine.connect() as conn:
        stored = conn.execute(sa.select(Notification.id)).scalars().all()
    assert sorted(stored) == list(range(1, WORKERS + 1))


@pytest.mark.postgres
def test_concurrent_user_inserts_on_postgres(pg_session, pg_engine):
    Session = session_factory(pg_engine)
    allocator = SequenceAllocator(User, USER_IDS)

    def worker(i: int) -> str:
        with Session() as s:
            row, result = allocator.insert_with_id(
                s,
                lambda identifier: User(user_id=identifier, name=f"user {i}", email=f"user{i}@example.com"),
            )
            return result.identifier

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        ids = list(pool.map(worker, range(WORKERS)))

    assert sorted(ids) == [f"USR{n:03d}" for n in range(1, WORKERS + 1)]

from storefront_ids.sequences import fallbacks
from storefront_ids.sequences.fallbacks import LocalCounter, timestamp_fallback


def test_counter_sequence():
    counter = LocalCounter(start=5)
    assert counter.next() == 6
    assert counter() == 7


def test_counter_reserve():
    counter = LocalCounter(start=0)
    r = counter.reserve(3)
    assert list(r) == [1, 2, 3]
    assert counter.next() == 4


def test_timestamp_fallback_keeps_last_six_digits(monkeypatch):
    monkeypatch.setattr(fallbacks.time, "time", lambda: 1_700_000_123.9)
    assert timestamp_fallback() == 123

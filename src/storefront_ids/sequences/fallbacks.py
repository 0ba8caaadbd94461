import threading
import time


def timestamp_fallback() -> int:
    """Seconds since the epoch, last six digits. Not guaranteed unique."""
    return int(time.time()) % 1_000_000


class LocalCounter:
    """
    Simple in-process counter used as a degraded fallback.

    Only reached when the backing store cannot be queried, so the values
    it hands out know nothing about persisted rows and may collide with them.

    Not shared between processes.
    """

    def __init__(self, start: int = 0):
        self._next = start + 1
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            val = self._next
            self._next += 1
            return val

    def reserve(self, n: int) -> range:
        with self._lock:
            start = self._next
            self._next += n
            return range(start, start + n)

    def __call__(self) -> int:
        return self.next()

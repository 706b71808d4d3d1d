"""Thread-safe holder for the current rate snapshot."""
from datetime import datetime, timezone
from typing import Optional
import threading

from fxrates.models import RateSnapshot
from fxrates.utils.errors import StoreUninitializedError


class ReadWriteLock:
    """Multiple-readers / single-writer lock with writer preference.

    Readers never block each other. A waiting writer stops new readers from
    entering, so a steady stream of reads cannot starve it.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            self._writer_active = False
            self._cond.notify_all()

    def read_locked(self) -> "_Guard":
        return _Guard(self.acquire_read, self.release_read)

    def write_locked(self) -> "_Guard":
        return _Guard(self.acquire_write, self.release_write)


class _Guard:
    def __init__(self, acquire, release):
        self._acquire = acquire
        self._release = release

    def __enter__(self):
        self._acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self._release()
        return False


class RateStore:
    """Holds zero or one RateSnapshot, shared by all request handlers."""

    def __init__(self, snapshot: Optional[RateSnapshot] = None):
        self._lock = ReadWriteLock()
        self._snapshot: Optional[RateSnapshot] = None
        self._updated_at: Optional[datetime] = None
        if snapshot is not None:
            self.write(snapshot)

    def read(self) -> Optional[RateSnapshot]:
        """Return the current snapshot, or None if the store was never populated."""
        with self._lock.read_locked():
            return self._snapshot

    def require(self) -> RateSnapshot:
        """Return the current snapshot or raise StoreUninitializedError."""
        snapshot = self.read()
        if snapshot is None:
            raise StoreUninitializedError()
        return snapshot

    def write(self, snapshot: RateSnapshot) -> None:
        """Atomically replace the current snapshot."""
        if not isinstance(snapshot, RateSnapshot):
            raise TypeError(f"Expected RateSnapshot, got {type(snapshot).__name__}")
        with self._lock.write_locked():
            self._snapshot = snapshot
            self._updated_at = datetime.now(timezone.utc)

    def clear(self) -> None:
        """Reset to the empty state."""
        with self._lock.write_locked():
            self._snapshot = None
            self._updated_at = None

    @property
    def is_populated(self) -> bool:
        return self.read() is not None

    @property
    def updated_at(self) -> Optional[datetime]:
        """UTC time of the last write."""
        with self._lock.read_locked():
            return self._updated_at

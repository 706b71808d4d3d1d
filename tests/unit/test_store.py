"""Tests for the rate store and its reader/writer lock."""
import threading
import time

import pytest

from fxrates.models import RateSnapshot
from fxrates.store import RateStore, ReadWriteLock
from fxrates.utils.errors import StoreUninitializedError


def test_store_starts_empty():
    store = RateStore()
    assert store.read() is None
    assert store.is_populated is False
    assert store.updated_at is None
    with pytest.raises(StoreUninitializedError):
        store.require()


def test_write_then_read(snapshot):
    store = RateStore()
    store.write(snapshot)
    assert store.read() is snapshot
    assert store.require() is snapshot
    assert store.is_populated is True
    assert store.updated_at is not None


def test_write_replaces_snapshot(store):
    newer = RateSnapshot(base="MYR", date="2024-01-02", rates={"USD": 0.22})
    store.write(newer)
    assert store.read().date == "2024-01-02"


def test_write_rejects_non_snapshot():
    store = RateStore()
    with pytest.raises(TypeError):
        store.write({"base": "MYR"})


def test_clear(store):
    store.clear()
    assert store.read() is None


def test_isolated_stores(snapshot):
    a = RateStore(snapshot)
    b = RateStore()
    assert a.read() is snapshot
    assert b.read() is None


def test_concurrent_reads_see_whole_snapshots():
    """Readers racing a writer only ever see one of the published snapshots."""
    first = RateSnapshot(base="MYR", date="day-1", rates={"USD": 0.21, "EUR": 0.19})
    second = RateSnapshot(base="MYR", date="day-2", rates={"USD": 0.22, "EUR": 0.20})
    store = RateStore(first)
    seen = []
    errors = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            current = store.read()
            if (current.date, current.rates["USD"]) not in {("day-1", 0.21), ("day-2", 0.22)}:
                errors.append(current)
            seen.append(current.date)

    def writer():
        for _ in range(200):
            store.write(second)
            store.write(first)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    w = threading.Thread(target=writer)
    w.start()
    w.join(timeout=10)
    stop.set()
    for t in readers:
        t.join(timeout=10)

    assert not w.is_alive()
    assert errors == []
    assert seen


def test_readers_do_not_block_each_other():
    lock = ReadWriteLock()
    lock.acquire_read()
    acquired = threading.Event()

    def second_reader():
        lock.acquire_read()
        acquired.set()
        lock.release_read()

    t = threading.Thread(target=second_reader)
    t.start()
    assert acquired.wait(timeout=2)
    t.join()
    lock.release_read()


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    written = threading.Event()

    def writer():
        with lock.write_locked():
            written.set()

    t = threading.Thread(target=writer)
    t.start()
    time.sleep(0.1)
    assert not written.is_set()
    lock.release_read()
    assert written.wait(timeout=2)
    t.join()


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    order = []

    def writer():
        with lock.write_locked():
            order.append("writer")

    def late_reader():
        with lock.read_locked():
            order.append("reader")

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.1)
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.1)
    assert order == []
    lock.release_read()
    w.join(timeout=2)
    r.join(timeout=2)
    assert order == ["writer", "reader"]

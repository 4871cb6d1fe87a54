"""Tests for the reader/writer lock guarding the item indices."""

import threading

from catalog.infrastructure.persistence.rw_lock import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    second_reader_in = threading.Event()

    def reader():
        with lock.read():
            second_reader_in.set()

    with lock.read():
        t = threading.Thread(target=reader)
        t.start()
        assert second_reader_in.wait(timeout=5)
    t.join(timeout=5)


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    writer_in = threading.Event()

    def writer():
        with lock.write():
            writer_in.set()

    with lock.read():
        t = threading.Thread(target=writer)
        t.start()
        assert not writer_in.wait(timeout=0.2)
    assert writer_in.wait(timeout=5)
    t.join(timeout=5)


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    reader_in = threading.Event()

    def reader():
        with lock.read():
            reader_in.set()

    with lock.write():
        t = threading.Thread(target=reader)
        t.start()
        assert not reader_in.wait(timeout=0.2)
    assert reader_in.wait(timeout=5)
    t.join(timeout=5)


def test_lock_released_after_exception():
    lock = ReadWriteLock()
    try:
        with lock.write():
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    with lock.write():
        pass
    with lock.read():
        pass

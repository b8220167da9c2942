"""Unit tests for KeyedLock."""

from __future__ import annotations

import threading

import pytest

from file_cache.services.locks import KeyedLock


@pytest.mark.unit
class TestKeyedLock:
    """Tests for per-key locking."""

    def test_lock_reclaimed_after_release(self) -> None:
        """No lock is retained once the holder leaves."""
        locks = KeyedLock()

        with locks.hold("a"):
            assert len(locks) == 1

        assert len(locks) == 0

    def test_reclaimed_after_exception(self) -> None:
        """Locks are released when the block raises."""
        locks = KeyedLock()

        with pytest.raises(RuntimeError), locks.hold("a"):
            raise RuntimeError("boom")

        assert len(locks) == 0
        with locks.hold("a"):
            pass

    def test_same_key_blocks(self) -> None:
        """A second holder of the same key waits for the first."""
        locks = KeyedLock()
        entered = threading.Event()

        def worker() -> None:
            with locks.hold("k"):
                entered.set()

        with locks.hold("k"):
            thread = threading.Thread(target=worker)
            thread.start()
            assert not entered.wait(0.1)

        thread.join(timeout=5)
        assert entered.is_set()
        assert len(locks) == 0

    def test_different_keys_do_not_block(self) -> None:
        """Holding one key does not block another."""
        locks = KeyedLock()
        entered = threading.Event()

        def worker() -> None:
            with locks.hold("other"):
                entered.set()

        with locks.hold("k"):
            thread = threading.Thread(target=worker)
            thread.start()
            assert entered.wait(5)

        thread.join(timeout=5)

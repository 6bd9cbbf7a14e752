"""Tests for LockManager."""

import fcntl
import os

import pytest

from treefilelib import LockManager


@pytest.fixture
def manager(tmp_path):
    manager = LockManager(str(tmp_path / "tree"))
    yield manager
    while manager.count:
        manager.unlock()
    manager.close()


def try_lock(path):
    """Try to take the lock through a separate file handle without blocking."""
    with open(path, "r+") as other:
        try:
            fcntl.flock(other.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            return False
        fcntl.flock(other.fileno(), fcntl.LOCK_UN)
        return True


class TestSentinelFile:

    def test_lock_path_is_next_to_root(self, tmp_path, manager):
        assert manager.lock_path == str(tmp_path / ".lock")

    def test_trailing_slash_on_root(self, tmp_path):
        assert LockManager(str(tmp_path / "tree") + "/").lock_path == str(tmp_path / ".lock")

    def test_relative_root(self):
        assert LockManager("tree").lock_path == os.path.join(os.curdir, ".lock")

    def test_custom_name(self, tmp_path):
        manager = LockManager(str(tmp_path / "tree"), lock_name=".treelock")
        assert manager.lock_path == str(tmp_path / ".treelock")

    def test_created_with_timestamp(self, tmp_path, manager):
        assert not (tmp_path / ".lock").exists()

        manager.lock()

        content = (tmp_path / ".lock").read_text()
        assert content.endswith("\n")
        assert content.strip().isdigit()

    def test_existing_file_is_reused(self, tmp_path, manager):
        (tmp_path / ".lock").write_text("123\n")

        manager.lock()

        assert (tmp_path / ".lock").read_text() == "123\n"


class TestCounting:

    def test_unlock_before_lock_is_noop(self, manager):
        assert manager.unlock() is None
        assert manager.count == 0

    def test_nested_lock_unlock(self, manager):
        assert manager.lock() == 1
        assert manager.lock() == 2
        assert manager.unlock() == 1
        assert manager.is_locked
        assert manager.unlock() == 0
        assert not manager.is_locked

    def test_extra_unlock_is_noop(self, manager):
        manager.lock()
        manager.unlock()

        assert manager.unlock() == 0
        assert manager.count == 0
        assert try_lock(manager.lock_path)

        assert manager.lock() == 1
        assert not try_lock(manager.lock_path)

    def test_context_manager(self, manager):
        with manager:
            with manager:
                assert manager.count == 2
            assert manager.count == 1
        assert manager.count == 0

    def test_close_while_locked(self, manager):
        manager.lock()
        with pytest.raises(RuntimeError):
            manager.close()


class TestExclusion:
    """The OS lock is held from the first lock() to the last unlock()."""

    def test_blocks_other_handles(self, manager):
        manager.lock()
        assert not try_lock(manager.lock_path)

        manager.unlock()
        assert try_lock(manager.lock_path)

    def test_held_until_outermost_unlock(self, manager):
        manager.lock()
        manager.lock()
        manager.unlock()

        assert not try_lock(manager.lock_path)

        manager.unlock()
        assert try_lock(manager.lock_path)

    def test_relock_after_release(self, manager):
        with manager:
            pass
        with manager:
            assert not try_lock(manager.lock_path)

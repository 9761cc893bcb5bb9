"""Tests for the inter-process locks.

Two lock objects on the same path stand in for two processes: each one
opens its own lock file handle, exactly as a separate process would.
"""

import threading

from jobcard.domain.exceptions import PersistenceError
from jobcard.infrastructure.persistence.file_locks import FileJobLocks, FileMutex


def _try_in_thread(fn):
    errors = []

    def run():
        try:
            fn()
        except PersistenceError as exc:
            errors.append(exc)

    t = threading.Thread(target=run)
    t.start()
    t.join()
    return errors


class TestFileMutex:

    def test_other_holder_is_excluded(self, tmp_path):
        path = tmp_path / "inventory.json.lock"
        first = FileMutex(path)
        second = FileMutex(path, timeout=0.1)

        def enter_second():
            with second:
                pass

        with first:
            errors = _try_in_thread(enter_second)
        assert len(errors) == 1
        assert "Timed out" in str(errors[0])

        with second:
            pass

    def test_reentrant(self, tmp_path):
        mutex = FileMutex(tmp_path / "jobs.json.lock")
        with mutex:
            with mutex:
                pass
        with mutex:
            pass


class TestFileJobLocks:

    def test_same_job_excluded_across_registries(self, tmp_path):
        ours = FileJobLocks(tmp_path / "locks")
        theirs = FileJobLocks(tmp_path / "locks", timeout=0.1)

        def take(job_id):
            def run():
                with theirs.hold(job_id):
                    pass
            return run

        with ours.hold(1):
            blocked = _try_in_thread(take(1))
            other_job = _try_in_thread(take(2))

        assert len(blocked) == 1
        assert "locked by another process" in str(blocked[0])
        assert other_job == []
        assert len(ours) == 0 and len(theirs) == 0

    def test_lock_dir_created_on_demand(self, tmp_path):
        locks = FileJobLocks(tmp_path / "nested" / "locks")
        with locks.hold(5):
            assert (tmp_path / "nested" / "locks" / "job-5.lock").exists()

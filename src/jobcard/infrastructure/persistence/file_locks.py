"""Locks that hold across processes.

Every CLI command runs in a process of its own, so thread locks alone do
not keep two commands from interleaving on the same job or data file.
These pair an in-process lock with a ``filelock.FileLock`` on a sidecar
``.lock`` file.  Lock files are left in place after release.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from jobcard.application.locks import JobLocks
from jobcard.domain.exceptions import PersistenceError

DEFAULT_LOCK_TIMEOUT = 30.0


class FileMutex:
    """Re-entrant lock on one path, exclusive across threads and processes."""

    def __init__(self, lock_path: Path, timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        self._lock_path = lock_path
        self._thread_lock = threading.RLock()
        # The thread lock already admits one thread at a time, so the
        # file lock's re-entry counter can be shared.
        self._file_lock = FileLock(str(lock_path), timeout=timeout, thread_local=False)

    @property
    def lock_path(self) -> Path:
        return self._lock_path

    def __enter__(self) -> FileMutex:
        self._thread_lock.acquire()
        try:
            self._file_lock.acquire()
        except Timeout as exc:
            self._thread_lock.release()
            raise PersistenceError(f"Timed out waiting for lock {self._lock_path}") from exc
        except BaseException:
            self._thread_lock.release()
            raise
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            self._file_lock.release()
        finally:
            self._thread_lock.release()


class FileJobLocks(JobLocks):
    """Per-job locks that also exclude other processes.

    The outermost holder of a job's lock additionally takes
    ``<lock_dir>/job-<id>.lock``.
    """

    def __init__(self, lock_dir: Path, timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        super().__init__()
        self._lock_dir = lock_dir
        self._timeout = timeout

    @contextmanager
    def _exclusive(self, job_id: int) -> Iterator[None]:
        try:
            self._lock_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot create lock directory {self._lock_dir}: {exc}") from exc
        lock = FileLock(str(self._lock_dir / f"job-{job_id}.lock"), timeout=self._timeout)
        try:
            lock.acquire()
        except Timeout as exc:
            raise PersistenceError(f"Job #{job_id} is locked by another process") from exc
        try:
            yield
        finally:
            lock.release()

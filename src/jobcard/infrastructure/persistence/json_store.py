"""Shared plumbing for the JSON-file repositories.

Each file is guarded by one re-entrant ``FileMutex`` per resolved path,
shared by every repository instance in the process and backed by a
``<file>.lock`` sidecar, so a read-modify-write done inside
``transaction()`` is atomic with respect to other threads and other
processes.  Writes
go to a temporary file that replaces the original, so a crash mid-write
never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from jobcard.domain.exceptions import PersistenceError
from jobcard.infrastructure.persistence.file_locks import FileMutex

_registry_guard = threading.Lock()
_path_locks: dict[Path, FileMutex] = {}


def _lock_for(path: Path) -> FileMutex:
    with _registry_guard:
        if path not in _path_locks:
            _path_locks[path] = FileMutex(path.with_name(path.name + ".lock"))
        return _path_locks[path]


class JsonFileStore:
    """A JSON array of records stored in one file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    @property
    def lock(self) -> FileMutex:
        return self._lock

    def load(self) -> list[dict]:
        with self._lock:
            try:
                return json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def persist(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        with self._lock:
            try:
                tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
                os.replace(tmp, self._file_path)
            except OSError as exc:
                raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Hold the file lock, yield the records, persist them on clean exit."""
        with self._lock:
            records = self.load()
            yield records
            self.persist(records)

    def _ensure_file(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock:
                if not self._file_path.exists():
                    self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot create {self._file_path}: {exc}") from exc

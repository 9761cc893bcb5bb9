"""Per-job serialization.

Handlers that mutate a job hold that job's lock for the whole
load-check-mutate-save sequence, so two requests against the same job
(say an ``add_part`` racing a ``complete``) are applied one after the
other.  Jobs with different ids never wait on each other.

``JobLocks`` itself only excludes threads of one process.  Deployments
where several processes share the same data override ``_exclusive``
to add an inter-process lock (see the file-backed variant wired by the
composition root).
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from dataclasses import dataclass, field


@dataclass
class _Entry:
    lock: threading.RLock = field(default_factory=threading.RLock)
    users: int = 0
    depth: int = 0


class JobLocks:
    """Registry of one re-entrant lock per job id.

    Entries live only while some thread holds or waits for them.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[int, _Entry] = {}

    @contextmanager
    def hold(self, job_id: int) -> Iterator[None]:
        entry = self._checkout(job_id)
        try:
            with entry.lock:
                entry.depth += 1
                try:
                    if entry.depth == 1:
                        with self._exclusive(job_id):
                            yield
                    else:
                        yield
                finally:
                    entry.depth -= 1
        finally:
            self._checkin(job_id, entry)

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _exclusive(self, job_id: int) -> AbstractContextManager[object]:
        """Extra exclusion taken by the outermost holder of a job's lock."""
        return nullcontext()

    def _checkout(self, job_id: int) -> _Entry:
        with self._guard:
            entry = self._entries.setdefault(job_id, _Entry())
            entry.users += 1
            return entry

    def _checkin(self, job_id: int, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[job_id]

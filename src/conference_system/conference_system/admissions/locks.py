from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator


class SessionLock:
    """A mutex that can be weakly referenced (plain `threading.Lock` objects
    cannot on every interpreter)."""

    __slots__ = ("_lock", "__weakref__")

    def __init__(self):
        self._lock = threading.Lock()

    def acquire(self, blocking: bool = True, timeout: float = -1) -> bool:
        return self._lock.acquire(blocking, timeout)

    def release(self) -> None:
        self._lock.release()

    def __enter__(self) -> "SessionLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc) -> None:
        self._lock.release()


class SessionLockRegistry:
    """One mutex per session id, alive only while someone holds a reference.

    Serialises check-ins for the same session inside this process; different
    sessions never wait on each other. An entry disappears once no caller
    holds its lock, so deleted sessions leave nothing behind.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[int, SessionLock]" = weakref.WeakValueDictionary()

    def lock_for(self, session_id: int) -> SessionLock:
        with self._guard:
            lock = self._locks.get(int(session_id))
            if lock is None:
                lock = SessionLock()
                self._locks[int(session_id)] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)

    @contextmanager
    def hold(self, session_id: int) -> Iterator[None]:
        with self.lock_for(session_id):
            yield

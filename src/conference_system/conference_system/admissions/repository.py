from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AdmissionAttempt, AdmissionRecord


class AdmissionLedger(Protocol):
    """Source of truth for who checked into which session."""

    def try_admit(self, *, participant_id: int, session_id: int, check_in_time: datetime) -> AdmissionAttempt:
        """Atomically insert an admission if the pair is new and a slot is free.

        Reading the session capacity, the duplicate check, counting existing
        admissions and the insert form one unit that is serialised against
        every other `try_admit` on the same session.
        """

        raise NotImplementedError

    def count_for_session(self, session_id: int) -> int:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AdmissionRecord]:
        raise NotImplementedError

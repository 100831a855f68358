from __future__ import annotations

from typing import Protocol


class RegistrationRepository(Protocol):
    """Per-participant set of sessions they intend to attend."""

    def add(self, *, participant_id: int, session_id: int) -> bool:
        """Add the pair if absent. Returns True when a new row was written.

        Must be a single atomic write (no read-modify-write), so concurrent
        adds for one participant end as the union of all of them.
        """

        raise NotImplementedError

    def sessions_for(self, participant_id: int) -> tuple[int, ...]:
        raise NotImplementedError

    def count_for_session(self, session_id: int) -> int:
        raise NotImplementedError

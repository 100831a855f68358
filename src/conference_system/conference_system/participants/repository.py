from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Participant


class ParticipantRepository(Protocol):
    """Identity store contract.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Participant]:
        raise NotImplementedError

    def get_by_token(self, identity_token: str) -> Optional[Participant]:
        raise NotImplementedError

    def create_participant(
        self,
        *,
        name: str,
        email: str,
        organization: Optional[str],
        password_hash: str,
        identity_token: str,
    ) -> Optional[int]:
        """Insert a participant with an empty registration set.

        Returns the new id, or None when the email (or token) is already taken.
        """

        raise NotImplementedError

    def delete_by_id(self, participant_id: int) -> bool:
        """Delete a participant; admissions and registrations cascade."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Participant]:
        raise NotImplementedError

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Optional

from ..common.validators import optional_text, require_email, require_non_empty, require_password
from ..core.constants import REGISTRATION_MAIL_SUBJECT
from ..core.exceptions import AuthenticationError, DuplicateEmailError, NotFoundError
from ..notifications.dispatcher import NotificationDispatcher
from .credentials import CredentialService
from .model import Participant
from .qr import qr_data_url, render_qr_png
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipantView:
    """What callers may see about a participant (no credential)."""

    participant_id: int
    name: str
    email: str
    organization: Optional[str]
    identity_token: str
    registered_sessions: tuple[int, ...]

    @classmethod
    def of(cls, p: Participant) -> "ParticipantView":
        return cls(
            participant_id=p.participant_id,
            name=p.name,
            email=p.email,
            organization=p.organization,
            identity_token=p.identity_token,
            registered_sessions=p.registered_sessions,
        )

    def to_dict(self, *, include_token: bool = False) -> dict:
        """Public shape. The identity token admits its holder at check-in,
        so only the participant themselves (register, login) receives it."""
        out = {
            "participant_id": self.participant_id,
            "name": self.name,
            "email": self.email,
            "organization": self.organization,
            "sessions_registered": list(self.registered_sessions),
        }
        if include_token:
            out["identity_token"] = self.identity_token
        return out


@dataclass(frozen=True)
class RegistrationReceipt:
    participant: ParticipantView
    notification: Future


class IdentityService:
    """Use cases: register, authenticate and look up participants."""

    def __init__(
        self,
        participants: ParticipantRepository,
        credentials: CredentialService,
        notifier: NotificationDispatcher,
    ):
        self._participants = participants
        self._credentials = credentials
        self._notifier = notifier

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        organization: Optional[str] = None,
    ) -> RegistrationReceipt:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_password(password)
        organization = optional_text(organization, "Organization")

        if self._participants.get_by_email(email):
            raise DuplicateEmailError("Email is already registered")

        token = self._credentials.mint_token(name, email)
        participant_id = self._participants.create_participant(
            name=name,
            email=email,
            organization=organization,
            password_hash=self._credentials.hash(password),
            identity_token=token,
        )
        if participant_id is None:
            # Lost a race with a concurrent registration for the same email.
            raise DuplicateEmailError("Email is already registered")

        logger.info("Registered participant %s", participant_id)
        view = ParticipantView(
            participant_id=participant_id,
            name=name,
            email=email,
            organization=organization,
            identity_token=token,
            registered_sessions=(),
        )
        future = self._notifier.dispatch(email, REGISTRATION_MAIL_SUBJECT, self._welcome_body(token))
        return RegistrationReceipt(participant=view, notification=future)

    @staticmethod
    def _welcome_body(token: str) -> str:
        return (
            "<h1>Welcome to the Conference!</h1>"
            "<p>Here is your QR Code:</p>"
            f'<img src="{qr_data_url(token)}" alt="{token}" />'
            f"<p>Identity token: <code>{token}</code></p>"
        )

    def authenticate(self, email: str, password: str) -> ParticipantView:
        participant = self._participants.get_by_email((email or "").strip().lower())
        if not participant or not self._credentials.verify(password or "", participant.password_hash):
            raise AuthenticationError("Invalid email or password")
        return ParticipantView.of(participant)

    def get(self, participant_id: int) -> ParticipantView:
        participant = self._participants.get_by_id(int(participant_id))
        if not participant:
            raise NotFoundError("Participant not found")
        return ParticipantView.of(participant)

    def list_participants(self) -> list[ParticipantView]:
        return [ParticipantView.of(p) for p in self._participants.list_all()]

    def delete(self, participant_id: int) -> None:
        if not self._participants.delete_by_id(int(participant_id)):
            raise NotFoundError("Participant not found")
        logger.info("Deleted participant %s", participant_id)

    def qr_png(self, participant_id: int) -> bytes:
        return render_qr_png(self.get(participant_id).identity_token)

from __future__ import annotations

import logging
from typing import Any

from ..catalog.repository import SessionRepository
from ..common.validators import require_positive_id
from ..core.exceptions import NotFoundError
from ..participants.repository import ParticipantRepository
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    """Use case: record a participant's intent to attend a session.

    Intent is unbounded; capacity only applies at check-in.
    """

    def __init__(
        self,
        registrations: RegistrationRepository,
        participants: ParticipantRepository,
        sessions: SessionRepository,
    ):
        self._registrations = registrations
        self._participants = participants
        self._sessions = sessions

    def register_for_session(self, participant_id: Any, session_id: Any) -> tuple[int, ...]:
        participant_id = require_positive_id(participant_id, "Participant id")
        session_id = require_positive_id(session_id, "Session id")

        if not self._participants.get_by_id(participant_id):
            raise NotFoundError("Participant not found")
        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session not found")

        added = self._registrations.add(participant_id=participant_id, session_id=session_id)
        sessions = self._registrations.sessions_for(participant_id)
        if session_id not in sessions:
            # Participant or session deleted between the lookup and the insert.
            raise NotFoundError("Session not found")

        if added:
            logger.info("Participant %s registered for session %s", participant_id, session_id)
        return sessions

    def registered_sessions(self, participant_id: Any) -> tuple[int, ...]:
        participant_id = require_positive_id(participant_id, "Participant id")
        if not self._participants.get_by_id(participant_id):
            raise NotFoundError("Participant not found")
        return self._registrations.sessions_for(participant_id)

    def registered_count(self, session_id: Any) -> int:
        session_id = require_positive_id(session_id, "Session id")
        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session not found")
        return self._registrations.count_for_session(session_id)

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..catalog.repository import SessionRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import AdmissionOutcome
from ..core.exceptions import AlreadyAdmittedError, CapacityExceededError, NotFoundError
from ..participants.repository import ParticipantRepository
from .locks import SessionLockRegistry
from .model import AdmissionAttempt, AdmissionRecord
from .repository import AdmissionLedger

logger = logging.getLogger(__name__)


class AdmissionService:
    """Admission control: check participants into capacity-bounded sessions.

    The capacity check and the admission insert happen inside one
    `AdmissionLedger.try_admit` call, made while holding the session's
    in-process lock. The ledger itself is responsible for cross-process
    atomicity (the MySQL ledger locks the session row).
    """

    def __init__(
        self,
        ledger: AdmissionLedger,
        participants: ParticipantRepository,
        sessions: SessionRepository,
        *,
        locks: Optional[SessionLockRegistry] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._ledger = ledger
        self._participants = participants
        self._sessions = sessions
        self._locks = locks or SessionLockRegistry()
        self._clock = clock

    def check_in(self, participant_id: Any, session_id: Any) -> AdmissionRecord:
        participant_id = require_positive_id(participant_id, "Participant id")
        session_id = require_positive_id(session_id, "Session id")

        if not self._participants.get_by_id(participant_id):
            raise NotFoundError("Participant not found")
        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session not found")

        with self._locks.hold(session_id):
            attempt = self._ledger.try_admit(
                participant_id=participant_id,
                session_id=session_id,
                check_in_time=self._clock(),
            )
        return self._resolve(attempt, participant_id=participant_id, session_id=session_id)

    def check_in_by_token(self, identity_token: str, session_id: Any) -> AdmissionRecord:
        token = require_non_empty(identity_token, "Identity token")
        participant = self._participants.get_by_token(token)
        if not participant:
            raise NotFoundError("Unknown identity token")
        return self.check_in(participant.participant_id, session_id)

    def _resolve(self, attempt: AdmissionAttempt, *, participant_id: int, session_id: int) -> AdmissionRecord:
        if attempt.outcome == AdmissionOutcome.ADMITTED:
            logger.info(
                "Admitted participant %s to session %s (%s/%s)",
                participant_id,
                session_id,
                attempt.admitted_count,
                attempt.capacity,
            )
            return attempt.record

        if attempt.outcome == AdmissionOutcome.ALREADY_ADMITTED:
            logger.info("Participant %s already admitted to session %s", participant_id, session_id)
            raise AlreadyAdmittedError("Participant is already checked in to this session")
        if attempt.outcome == AdmissionOutcome.FULL:
            logger.info(
                "Rejected participant %s: session %s is full (%s/%s)",
                participant_id,
                session_id,
                attempt.admitted_count,
                attempt.capacity,
            )
            raise CapacityExceededError("Session is full")
        if attempt.outcome == AdmissionOutcome.PARTICIPANT_MISSING:
            raise NotFoundError("Participant not found")
        # Deleted between the lookup and the ledger call.
        raise NotFoundError("Session not found")

    def admitted_count(self, session_id: Any) -> int:
        session_id = self._require_session(session_id)
        return self._ledger.count_for_session(session_id)

    def list_admissions(self, session_id: Any) -> list[AdmissionRecord]:
        session_id = self._require_session(session_id)
        return list(self._ledger.list_for_session(session_id))

    def _require_session(self, session_id: Any) -> int:
        session_id = require_positive_id(session_id, "Session id")
        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session not found")
        return session_id

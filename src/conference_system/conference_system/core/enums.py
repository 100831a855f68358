from __future__ import annotations

from enum import Enum


class AdmissionOutcome(str, Enum):
    """Result of one atomic count-and-insert attempt on the admission ledger."""

    ADMITTED = "ADMITTED"
    ALREADY_ADMITTED = "ALREADY_ADMITTED"
    FULL = "FULL"
    SESSION_MISSING = "SESSION_MISSING"
    PARTICIPANT_MISSING = "PARTICIPANT_MISSING"


class SessionUpdateOutcome(str, Enum):
    UPDATED = "UPDATED"
    MISSING = "MISSING"
    BELOW_ADMITTED = "BELOW_ADMITTED"

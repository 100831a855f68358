from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AdmissionOutcome


@dataclass(frozen=True)
class AdmissionRecord:
    """Domain entity: one successful check-in of a participant into a session."""

    admission_id: int
    participant_id: int
    session_id: int
    check_in_time: datetime


@dataclass(frozen=True)
class AdmissionAttempt:
    """What the ledger observed and did inside one count-and-insert unit."""

    outcome: AdmissionOutcome
    record: Optional[AdmissionRecord] = None
    admitted_count: int = 0
    capacity: int = 0

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Participant:
    """Domain entity: a registered conference participant.

    Note: plain data object; `password_hash` must never leave the service layer.
    """

    participant_id: int
    name: str
    email: str
    organization: Optional[str]
    password_hash: str
    identity_token: str
    registered_sessions: tuple[int, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None

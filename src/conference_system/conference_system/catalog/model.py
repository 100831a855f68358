from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Track:
    track_id: int
    title: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """A scheduled talk; capacity bounds its admissions."""

    session_id: int
    track_id: int
    title: str
    speaker: str
    time: datetime
    venue: str
    capacity: int


@dataclass(frozen=True)
class ScheduleRow:
    """Read-model for the schedule listing (session joined with its track)."""

    session_id: int
    track_id: int
    track_title: str
    title: str
    speaker: str
    time: datetime
    venue: str
    capacity: int
    admitted_count: int
    registered_count: int

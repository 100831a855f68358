from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ProceedingsFile:
    file_id: int
    file_name: str
    file_path: str
    uploaded_at: Optional[datetime] = None

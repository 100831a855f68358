from __future__ import annotations

from typing import Protocol, Sequence

from .model import ProceedingsFile


class ProceedingsRepository(Protocol):
    def create_file(self, *, file_name: str, file_path: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[ProceedingsFile]:
        raise NotImplementedError

from __future__ import annotations

import logging
from typing import Optional

from werkzeug.datastructures import FileStorage

from ..core.constants import MAX_TEXT_LENGTH
from ..core.exceptions import ValidationError
from .model import ProceedingsFile
from .repository import ProceedingsRepository
from .storage import LocalProceedingsStorage

logger = logging.getLogger(__name__)


class ProceedingsService:
    def __init__(self, proceedings: ProceedingsRepository, storage: LocalProceedingsStorage):
        self._proceedings = proceedings
        self._storage = storage

    def upload(self, upload: Optional[FileStorage]) -> ProceedingsFile:
        if upload is None or not (upload.filename or "").strip():
            raise ValidationError("A file is required")
        if len(upload.filename) > MAX_TEXT_LENGTH:
            raise ValidationError(f"File name must be at most {MAX_TEXT_LENGTH} characters")

        original, stored_path = self._storage.save(upload)
        try:
            file_id = self._proceedings.create_file(file_name=original, file_path=stored_path)
        except Exception:
            # Keep storage and table in step: no orphaned files.
            self._storage.remove(stored_path)
            raise

        logger.info("Stored proceedings %s as %s", original, stored_path)
        return ProceedingsFile(file_id=file_id, file_name=original, file_path=stored_path)

    def list_files(self) -> list[ProceedingsFile]:
        return list(self._proceedings.list_all())

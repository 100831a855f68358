from __future__ import annotations

import uuid
from pathlib import Path

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename


class LocalProceedingsStorage:
    """Stores uploaded files under one directory with collision-free names."""

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def save(self, upload: FileStorage) -> tuple[str, str]:
        """Returns (original_name, stored_path)."""
        original = upload.filename or ""
        safe = secure_filename(original) or "upload"
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._root / f"{uuid.uuid4().hex}_{safe}"
        upload.save(str(target))
        return original, str(target)

    def remove(self, stored_path: str) -> None:
        Path(stored_path).unlink(missing_ok=True)

from __future__ import annotations

import io
from pathlib import Path

import pytest
from werkzeug.datastructures import FileStorage

from src.conference_system.conference_system.core.exceptions import ValidationError
from src.conference_system.conference_system.proceedings.service import ProceedingsService
from src.conference_system.conference_system.proceedings.storage import LocalProceedingsStorage


def _upload(name: str, data: bytes = b"%PDF-1.4 proceedings") -> FileStorage:
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type="application/pdf")


def test_upload_stores_file_and_records_it(container):
    stored = container.proceedings_service.upload(_upload("../Day 1 Talks.pdf"))

    path = Path(stored.file_path)
    assert stored.file_name == "../Day 1 Talks.pdf"
    assert path.read_bytes() == b"%PDF-1.4 proceedings"
    assert path.name.endswith("_Day_1_Talks.pdf")
    assert [f.file_id for f in container.proceedings_service.list_files()] == [stored.file_id]


def test_same_name_twice_does_not_overwrite(container):
    first = container.proceedings_service.upload(_upload("a.pdf", b"one"))
    second = container.proceedings_service.upload(_upload("a.pdf", b"two"))

    assert first.file_path != second.file_path
    assert Path(first.file_path).read_bytes() == b"one"


@pytest.mark.parametrize("upload", [None, FileStorage(stream=io.BytesIO(b""), filename="")])
def test_a_file_is_required(container, upload):
    with pytest.raises(ValidationError):
        container.proceedings_service.upload(upload)


def test_failed_record_removes_the_stored_file(tmp_path):
    class BrokenRepo:
        def create_file(self, *, file_name, file_path):
            raise RuntimeError("insert failed")

        def list_all(self):
            return []

    root = tmp_path / "uploads"
    service = ProceedingsService(BrokenRepo(), LocalProceedingsStorage(root))

    with pytest.raises(RuntimeError):
        service.upload(_upload("a.pdf"))

    assert list(root.iterdir()) == []


def test_file_name_must_fit_its_column(container, tmp_path):
    with pytest.raises(ValidationError):
        container.proceedings_service.upload(_upload("p" * 252 + ".pdf"))

    assert container.proceedings_service.list_files() == []
    assert not (tmp_path / "uploads").exists()

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_datetime
from ..common.http import domain_error_response, system_error_response
from ..container import Container
from ..core.exceptions import DomainError
from .model import ProceedingsFile

logger = logging.getLogger(__name__)


def _file_dict(f: ProceedingsFile) -> dict:
    return {
        "file_id": f.file_id,
        "file_name": f.file_name,
        "file_path": f.file_path,
        "uploaded_at": format_datetime(f.uploaded_at),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/upload-proceedings", methods=["POST"], endpoint="upload_proceedings")
    def upload_proceedings():
        try:
            stored = container.proceedings_service.upload(request.files.get("file"))
            return jsonify({"success": True, "message": "Proceedings uploaded successfully", "file": _file_dict(stored)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error uploading proceedings")
            return system_error_response("Error uploading proceedings")

    @app.route("/proceedings", methods=["GET"], endpoint="list_proceedings")
    def list_proceedings():
        try:
            return jsonify([_file_dict(f) for f in container.proceedings_service.list_files()]), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching proceedings")
            return system_error_response("Error fetching proceedings")

from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_datetime
from ..common.http import domain_error_response, json_body, participant_id_from, system_error_response
from ..container import Container
from ..core.exceptions import DomainError
from .model import AdmissionRecord

logger = logging.getLogger(__name__)


def _admission_dict(r: AdmissionRecord) -> dict:
    return {
        "admission_id": r.admission_id,
        "participant_id": r.participant_id,
        "session_id": r.session_id,
        "check_in_time": format_datetime(r.check_in_time),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/check-in", methods=["POST"], endpoint="check_in")
    def check_in():
        data = json_body()
        try:
            record = container.admission_service.check_in(participant_id_from(data), data.get("session_id"))
            return jsonify({"success": True, "message": "Check-in successful", "admission": _admission_dict(record)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error during check-in")
            return system_error_response("Error during check-in")

    @app.route("/check-in/qr", methods=["POST"], endpoint="check_in_qr")
    def check_in_qr():
        """Check in by the identity token scanned from a participant's QR code."""
        data = json_body()
        try:
            record = container.admission_service.check_in_by_token(
                data.get("identity_token", ""), data.get("session_id")
            )
            return jsonify({"success": True, "message": "Check-in successful", "admission": _admission_dict(record)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error during QR check-in")
            return system_error_response("Error during check-in")

    @app.route("/sessions/<int:session_id>/admissions", methods=["GET"], endpoint="session_admissions")
    def session_admissions(session_id: int):
        try:
            records = container.admission_service.list_admissions(session_id)
            return (
                jsonify(
                    {
                        "session_id": session_id,
                        "admitted_count": len(records),
                        "admissions": [_admission_dict(r) for r in records],
                    }
                ),
                200,
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching admissions for session %s", session_id)
            return system_error_response("Error fetching admissions")

from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import domain_error_response, json_body, participant_id_from, system_error_response
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/register-session", methods=["POST"], endpoint="register_session")
    def register_session():
        data = json_body()
        try:
            sessions = container.registration_service.register_for_session(
                participant_id_from(data), data.get("session_id")
            )
            return (
                jsonify(
                    {
                        "success": True,
                        "message": "Session registration successful",
                        "sessions_registered": list(sessions),
                    }
                ),
                200,
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error registering for session")
            return system_error_response("Error registering for session")

    @app.route("/participants/<int:participant_id>/sessions", methods=["GET"], endpoint="registered_sessions")
    def registered_sessions(participant_id: int):
        try:
            sessions = container.registration_service.registered_sessions(participant_id)
            return jsonify({"participant_id": participant_id, "sessions_registered": list(sessions)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching registrations for participant %s", participant_id)
            return system_error_response("Error fetching registrations")

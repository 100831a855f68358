from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, send_file, session

from ..common.http import domain_error_response, json_body, system_error_response
from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/participants", methods=["GET"], endpoint="list_participants")
    def list_participants():
        try:
            rows = [p.to_dict() for p in container.identity_service.list_participants()]
            return jsonify(rows), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching participants")
            return system_error_response("Error fetching participants")

    @app.route("/participants/<int:participant_id>", methods=["GET"], endpoint="get_participant")
    def get_participant(participant_id: int):
        try:
            return jsonify(container.identity_service.get(participant_id).to_dict()), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching participant %s", participant_id)
            return system_error_response("Error fetching participant")

    @app.route("/participants/<int:participant_id>", methods=["DELETE"], endpoint="delete_participant")
    def delete_participant(participant_id: int):
        try:
            container.identity_service.delete(participant_id)
            return jsonify({"success": True, "message": "Participant deleted successfully"}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting participant %s", participant_id)
            return system_error_response("Error deleting participant")

    @app.route("/participants/<int:participant_id>/qr", methods=["GET"], endpoint="participant_qr")
    def participant_qr(participant_id: int):
        try:
            if session.get("participant_id") != participant_id:
                raise AuthenticationError("Log in as this participant to view the QR code")
            png = container.identity_service.qr_png(participant_id)
            return send_file(io.BytesIO(png), mimetype="image/png")
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error rendering QR code for participant %s", participant_id)
            return system_error_response("Error rendering QR code")

    @app.route("/register", methods=["POST"], endpoint="register_participant")
    def register_participant():
        data = json_body()
        try:
            receipt = container.identity_service.register(
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                organization=data.get("organization"),
            )
            return (
                jsonify(
                    {
                        "success": True,
                        "message": "Registration successful",
                        "participant_id": receipt.participant.participant_id,
                        "identity_token": receipt.participant.identity_token,
                    }
                ),
                201,
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error registering participant")
            return system_error_response("Error registering participant")

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            participant = container.identity_service.authenticate(data.get("email", ""), data.get("password", ""))
            session["participant_id"] = participant.participant_id
            session["name"] = participant.name
            return jsonify({"success": True, "message": "Login successful", "participant": participant.to_dict(include_token=True)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error during login")
            return system_error_response("Error during login")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"}), 200

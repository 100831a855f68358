from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_datetime
from ..common.http import domain_error_response, json_body, system_error_response
from ..container import Container
from ..core.exceptions import DomainError
from .model import ScheduleRow, Session, Track

logger = logging.getLogger(__name__)


def _track_dict(t: Track) -> dict:
    return {"track_id": t.track_id, "title": t.title, "description": t.description}


def _session_dict(s: Session) -> dict:
    return {
        "session_id": s.session_id,
        "track_id": s.track_id,
        "title": s.title,
        "speaker": s.speaker,
        "time": format_datetime(s.time),
        "venue": s.venue,
        "capacity": s.capacity,
    }


def _schedule_dict(r: ScheduleRow) -> dict:
    return {
        "session_id": r.session_id,
        "track_id": r.track_id,
        "track": r.track_title,
        "title": r.title,
        "speaker": r.speaker,
        "time": format_datetime(r.time),
        "venue": r.venue,
        "capacity": r.capacity,
        "admitted_count": r.admitted_count,
        "registered_count": r.registered_count,
        "seats_left": max(r.capacity - r.admitted_count, 0),
    }


def _session_fields(data: dict) -> dict:
    # Accept the legacy field names (track, session_name) next to the current ones.
    return {
        "track_id": data.get("track_id", data.get("track")),
        "title": data.get("title", data.get("session_name", "")),
        "speaker": data.get("speaker", ""),
        "time": data.get("time", ""),
        "venue": data.get("venue", ""),
        "capacity": data.get("capacity"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/schedule", methods=["GET"], endpoint="schedule")
    def schedule():
        try:
            return jsonify([_schedule_dict(r) for r in container.catalog_service.list_schedule()]), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching schedule")
            return system_error_response("Error fetching schedule")

    @app.route("/tracks", methods=["GET"], endpoint="list_tracks")
    def list_tracks():
        try:
            return jsonify([_track_dict(t) for t in container.catalog_service.list_tracks()]), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching tracks")
            return system_error_response("Error fetching tracks")

    @app.route("/tracks", methods=["POST"], endpoint="save_track")
    def save_track():
        data = json_body()
        try:
            if data.get("track_id"):
                track = container.catalog_service.update_track(
                    track_id=data.get("track_id"),
                    title=data.get("title", ""),
                    description=data.get("description"),
                )
                return jsonify({"success": True, "message": "Track updated successfully", "track": _track_dict(track)}), 200

            track = container.catalog_service.create_track(title=data.get("title", ""), description=data.get("description"))
            return jsonify({"success": True, "message": "Track added successfully", "track": _track_dict(track)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error managing track")
            return system_error_response("Error managing track")

    @app.route("/tracks/<int:track_id>", methods=["DELETE"], endpoint="delete_track")
    def delete_track(track_id: int):
        try:
            container.catalog_service.delete_track(track_id)
            return jsonify({"success": True, "message": "Track deleted successfully"}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting track %s", track_id)
            return system_error_response("Error deleting track")

    @app.route("/sessions", methods=["POST"], endpoint="save_session")
    def save_session():
        data = json_body()
        try:
            if data.get("session_id"):
                s = container.catalog_service.update_session(data.get("session_id"), **_session_fields(data))
                return jsonify({"success": True, "message": "Session updated successfully", "session": _session_dict(s)}), 200

            s = container.catalog_service.create_session(**_session_fields(data))
            return jsonify({"success": True, "message": "Session added successfully", "session": _session_dict(s)}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error managing session")
            return system_error_response("Error managing session")

    @app.route("/sessions/<int:session_id>", methods=["PUT"], endpoint="update_session")
    def update_session(session_id: int):
        try:
            s = container.catalog_service.update_session(session_id, **_session_fields(json_body()))
            return jsonify({"success": True, "message": "Session updated successfully", "session": _session_dict(s)}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error updating session %s", session_id)
            return system_error_response("Error managing session")

    @app.route("/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    def get_session(session_id: int):
        try:
            s = container.catalog_service.get_session(session_id)
            out = _session_dict(s)
            out["admitted_count"] = container.admission_service.admitted_count(session_id)
            out["registered_count"] = container.registration_service.registered_count(session_id)
            return jsonify(out), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error fetching session %s", session_id)
            return system_error_response("Error fetching session")

    @app.route("/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    def delete_session(session_id: int):
        try:
            container.catalog_service.delete_session(session_id)
            return jsonify({"success": True, "message": "Session deleted successfully"}), 200
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Error deleting session %s", session_id)
            return system_error_response("Error deleting session")

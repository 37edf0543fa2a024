import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request
from pydantic import TypeAdapter, ValidationError

from scheduling.errors import ConflictError, InterviewValidationError

logger = logging.getLogger(__name__)

interview_bp = Blueprint("interview", __name__)

_INSTANT = TypeAdapter(datetime)


def _book():
    return current_app.extensions["interview_book"]


def _dump(interview):
    return interview.model_dump(mode="json") if interview is not None else None


def _dump_all():
    return [_dump(i) for i in _book().list_all()]


def _body() -> dict:
    """
    JSON object body. Timestamps must carry a UTC offset ("Z" or "+02:00");
    a bare datetime-local value like "2025-03-10T10:00" is rejected.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InterviewValidationError(["request body must be a JSON object"])
    errors = []
    for key in ("start", "end"):
        try:
            value = _INSTANT.validate_python(data[key])
        except (KeyError, ValidationError):
            continue  # missing or unparseable; the book reports it
        if value.tzinfo is None:
            errors.append(f"{key}: timestamp must include a UTC offset")
    if errors:
        raise InterviewValidationError(errors)
    return data


@interview_bp.errorhandler(InterviewValidationError)
def _invalid(e):
    logger.info("[%s %s] rejected: %s", request.method, request.path, e)
    return jsonify({"error": "invalid_interview", "details": e.errors}), 400


@interview_bp.errorhandler(ConflictError)
def _conflict(e):
    logger.info("[%s %s] conflict with interview %s", request.method, request.path, e.colliding.id)
    return jsonify({"error": "scheduling_conflict", "message": str(e), "conflict": _dump(e.colliding)}), 409


@interview_bp.route("/api/interviews", methods=["GET"])
def list_interviews():
    return jsonify({"interviews": _dump_all()})


@interview_bp.route("/api/interviews/<int:interview_id>", methods=["GET"])
def get_interview(interview_id):
    interview = _book().get(interview_id)
    if interview is None:
        return jsonify({"error": "not_found"}), 404
    return jsonify({"interview": _dump(interview)})


@interview_bp.route("/api/interviews", methods=["POST"])
def schedule_interview():
    data = _body()
    args = (data.get("candidate"), data.get("interviewer"), data.get("start"))
    if data.get("end"):
        interview = _book().schedule_new(*args, data.get("end"), data.get("type"))
    else:
        # date-and-time only: book a standard slot
        interview = _book().schedule_slot(*args, data.get("type"))
    return jsonify({"interview": _dump(interview)}), 201


@interview_bp.route("/api/interviews/<int:interview_id>", methods=["PUT"])
def edit_interview(interview_id):
    data = _body()
    interview = _book().edit_existing(
        interview_id,
        data.get("candidate"),
        data.get("interviewer"),
        data.get("start"),
        data.get("end"),
        data.get("type"),
    )
    return jsonify({"interview": _dump(interview), "interviews": _dump_all()})


@interview_bp.route("/api/interviews/<int:interview_id>/time", methods=["PATCH"])
def move_interview(interview_id):
    """Calendar drag or resize."""
    data = _body()
    interview = _book().move_or_resize(interview_id, data.get("start"), data.get("end"))
    return jsonify({"interview": _dump(interview), "interviews": _dump_all()})


@interview_bp.route("/api/interviews/<int:interview_id>", methods=["DELETE"])
def delete_interview(interview_id):
    _book().remove(interview_id)
    return jsonify({"interviews": _dump_all()})

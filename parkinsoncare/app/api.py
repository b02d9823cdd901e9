from __future__ import annotations

import io
import logging
from typing import Any, Mapping

from flask import Blueprint, jsonify, request, send_file

from .auth import AuthError, extract_bearer_token, get_session_manager, verify_session
from .education import education_sections
from .report import build_assessment_report, new_report_id


api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)


def _credentials() -> Mapping[str, Any]:
    data = request.get_json(silent=True) if request.is_json else request.form
    if not isinstance(data, Mapping):
        raise AuthError("invalid_fields", 400)
    return data


# -----------------------------
# Auth
# -----------------------------


@api_bp.post("/api/auth/register")
def register():
    manager = get_session_manager()
    try:
        data = _credentials()
        user = manager.register(data.get("username"), data.get("email"), data.get("password"))
        session = manager.login(user.email, data.get("password"))
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code
    return jsonify({"token": session.token, "user": user.public_dict()}), 201


@api_bp.post("/api/auth/login")
def login():
    manager = get_session_manager()
    try:
        data = _credentials()
        session = manager.login(data.get("email"), data.get("password"))
        user = manager.user_for(session)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code
    return jsonify({"token": session.token, "user": user.public_dict()}), 200


@api_bp.post("/api/auth/logout")
def logout():
    try:
        verify_session(request)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code
    get_session_manager().logout(extract_bearer_token(request))
    return jsonify({"status": "logged_out"}), 200


@api_bp.get("/api/auth/session")
def current_session():
    try:
        session = verify_session(request)
        user = get_session_manager().user_for(session)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code
    return jsonify({"user": user.public_dict(), "createdAt": session.created_at}), 200


# -----------------------------
# Assessments
# -----------------------------


@api_bp.get("/api/assessments")
def list_assessments():
    try:
        session = verify_session(request)
        items = get_session_manager().assessments(session)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code
    return jsonify({"items": [a.to_dict() for a in items]}), 200


@api_bp.get("/api/assessments/<record_id>/export/pdf")
def export_pdf(record_id: str):
    try:
        session = verify_session(request)
        manager = get_session_manager()
        assessment = manager.get_assessment(session, record_id)
        user = manager.user_for(session)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code

    if assessment is None:
        return jsonify({"error": "not_found"}), 404

    report_id = new_report_id()
    pdf_bytes = build_assessment_report(assessment, username=user.username, report_id=report_id)
    logger.info("export_pdf: user_id=%s record_id=%s report_id=%s", user.id, record_id, report_id)
    return send_file(
        io.BytesIO(pdf_bytes),
        as_attachment=True,
        download_name=f"PD-Assessment-{report_id}.pdf",
        mimetype="application/pdf",
    )


# -----------------------------
# Education
# -----------------------------


@api_bp.get("/api/education")
def education():
    return jsonify({"sections": education_sections()}), 200

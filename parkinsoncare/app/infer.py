from __future__ import annotations

import logging
from typing import Mapping

from flask import Blueprint, jsonify, request

from ..models.errors import InvalidInput
from ..models.health_risk import HealthRiskScorer, parse_health_metrics
from ..models.voice_features import VoiceRiskScorer
from .assessment import health_assessment, voice_assessment
from .audio import decode_audio, source_kind_for
from .auth import AuthError, get_session_manager, verify_session


infer_bp = Blueprint("infer", __name__)
logger = logging.getLogger(__name__)

_VOICE_SCORER = VoiceRiskScorer()
_HEALTH_SCORER = HealthRiskScorer()


@infer_bp.post("/infer/voice")
def infer_voice():
    """Score a voice clip.

    Expected multipart/form-data keys:
      - file: audio (WAV/FLAC/OGG, or WebM when ffmpeg is available)
      - sourceKind: optional "recorded" | "uploaded"; defaults from the file's mimetype
      - recordId: optional client-generated id
    """
    try:
        session = verify_session(request)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code

    if "file" not in request.files:
        return jsonify({"error": "missing file"}), 400

    file_storage = request.files["file"]
    audio_bytes = file_storage.read() or b""
    record_id = (request.form.get("recordId") or "").strip() or None

    try:
        kind = source_kind_for(file_storage.mimetype, request.form.get("sourceKind"))
        sample = decode_audio(audio_bytes, kind, file_storage.filename)
        analysis = _VOICE_SCORER.analyze(sample)
    except InvalidInput as exc:
        logger.info("infer_voice: rejected input user_id=%s: %s", session.user_id, exc)
        return jsonify({"error": str(exc)}), 400
    except Exception as e:
        logger.exception("infer_voice: scoring error: %s", e)
        return jsonify({"error": "inference_failed"}), 500

    assessment = voice_assessment(analysis, record_id)
    try:
        get_session_manager().add_assessment(session, assessment)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code

    logger.info(
        "infer_voice: user_id=%s record_id=%s samples=%d sample_rate=%d kind=%s score=%.2f band=%s",
        session.user_id,
        assessment.record_id,
        len(sample),
        sample.sample_rate,
        kind.value,
        assessment.score,
        assessment.band.value,
    )
    return jsonify(assessment.to_dict()), 200


@infer_bp.post("/infer/health")
def infer_health():
    """Score the health-metrics form, submitted as JSON or form fields."""
    try:
        session = verify_session(request)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code

    data = request.get_json(silent=True) if request.is_json else request.form
    record_id = None
    if isinstance(data, Mapping):
        record_id = (str(data.get("recordId") or "")).strip() or None

    try:
        metrics = parse_health_metrics(data)
        score = _HEALTH_SCORER.score(metrics)
    except InvalidInput as exc:
        logger.info("infer_health: rejected input user_id=%s: %s", session.user_id, exc)
        return jsonify({"error": str(exc)}), 400

    assessment = health_assessment(metrics, score, record_id)
    try:
        get_session_manager().add_assessment(session, assessment)
    except AuthError as exc:
        return jsonify({"error": exc.code}), exc.status_code

    logger.info(
        "infer_health: user_id=%s record_id=%s score=%.2f band=%s",
        session.user_id,
        assessment.record_id,
        assessment.score,
        assessment.band.value,
    )
    return jsonify(assessment.to_dict()), 200

import re

import numpy as np

from parkinsoncare.app.assessment import health_assessment, voice_assessment
from parkinsoncare.app import report
from parkinsoncare.app.report import build_assessment_report, new_report_id
from parkinsoncare.models.health_risk import HealthRiskScorer, parse_health_metrics
from parkinsoncare.models.voice_features import AudioSample, VoiceRiskScorer


def test_report_id_format():
    assert re.fullmatch(r"PD\d{6}", new_report_id())


def test_health_report_is_pdf(health_example):
    metrics = parse_health_metrics(health_example)
    assessment = health_assessment(metrics, HealthRiskScorer().score(metrics))
    pdf = build_assessment_report(assessment, username="ann", report_id="PD123456")
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_high_risk_voice_report_is_pdf():
    rng = np.random.default_rng(1)
    analysis = VoiceRiskScorer().analyze(AudioSample(rng.uniform(-1, 1, 32000), 16000))
    assessment = voice_assessment(analysis)
    assert assessment.band.value == "High"
    pdf = build_assessment_report(assessment)
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_every_recommendation_is_drawn(monkeypatch, health_example):
    drawn = []
    original_text = report._Page.text

    def recording_text(self, x, y, value, *args, **kwargs):
        drawn.append(value)
        return original_text(self, x, y, value, *args, **kwargs)

    monkeypatch.setattr(report._Page, "text", recording_text)
    metrics = parse_health_metrics(health_example)
    assessment = health_assessment(metrics, HealthRiskScorer().score(metrics))
    assessment.recommendations = ["Note: keep a symptom diary.", *assessment.recommendations]

    build_assessment_report(assessment)

    assert "Note: keep a symptom diary." in drawn
    for rec in assessment.recommendations[1:]:
        assert rec.split()[0] in " ".join(drawn)

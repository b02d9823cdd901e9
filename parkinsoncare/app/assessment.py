from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models.health_risk import HealthMetrics
from ..models.recommendations import DISCLAIMER, SeverityBand, classify, recommend
from ..models.voice_features import VoiceAnalysis


@dataclass
class Assessment:
    """One scored submission, as stored in a user's history and exported to PDF."""

    record_id: str
    kind: str
    score: float
    band: SeverityBand
    recommendations: List[str]
    created_at: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recordId": self.record_id,
            "kind": self.kind,
            "score": round(self.score, 2),
            "riskLevel": self.band.risk_level,
            "severity": self.band.label,
            "recommendations": list(self.recommendations),
            "disclaimer": DISCLAIMER,
            "createdAt": self.created_at,
            "details": dict(self.details),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assessment":
        return cls(
            record_id=data["recordId"],
            kind=data["kind"],
            score=float(data["score"]),
            band=SeverityBand(data["severity"].replace(" Risk", "")),
            recommendations=list(data.get("recommendations") or []),
            created_at=data["createdAt"],
            details=dict(data.get("details") or {}),
        )


def _new_record_id(kind: str) -> str:
    return f"{kind}_{time.strftime('%Y%m%d_%H%M%S')}_{time.time_ns() % 1_000_000:06d}"


def _build(kind: str, score: float, details: Dict[str, Any], record_id: Optional[str]) -> Assessment:
    band = classify(score)
    return Assessment(
        record_id=record_id or _new_record_id(kind),
        kind=kind,
        score=score,
        band=band,
        recommendations=recommend(band),
        created_at=datetime.now(timezone.utc).isoformat(),
        details=details,
    )


def voice_assessment(analysis: VoiceAnalysis, record_id: Optional[str] = None) -> Assessment:
    return _build("voice", analysis.score, analysis.to_dict(), record_id)


def health_assessment(
    metrics: HealthMetrics, score: float, record_id: Optional[str] = None
) -> Assessment:
    return _build("health", score, metrics.to_dict(), record_id)

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Tuple

from .errors import InvalidInput


logger = logging.getLogger(__name__)


# (attribute, form field) pairs, in form order
HEALTH_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("age", "age"),
    ("heart_rate", "heartRate"),
    ("spo2", "spO2"),
    ("muscle_stiffness", "muscleStiffness"),
    ("calories_burnt", "caloriesBurnt"),
    ("sleep", "sleep"),
    ("step_count", "stepCount"),
)


@dataclass(frozen=True)
class HealthMetrics:
    age: float
    heart_rate: float
    spo2: float
    muscle_stiffness: float
    calories_burnt: float
    sleep: float
    step_count: float

    def to_dict(self) -> Dict[str, float]:
        values = asdict(self)
        return {form_name: values[attr] for attr, form_name in HEALTH_FIELDS}


def _parse_number(name: str, value: Any) -> float:
    if value is None:
        raise InvalidInput(f"missing field: {name}")
    if isinstance(value, bool):
        raise InvalidInput(f"field {name} must be numeric, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidInput(f"missing field: {name}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"field {name} must be numeric, got {value!r}") from None
    if math.isnan(number) or math.isinf(number):
        raise InvalidInput(f"field {name} must be finite, got {value!r}")
    return number


def parse_health_metrics(data: Mapping[str, Any]) -> HealthMetrics:
    """Build HealthMetrics from form or JSON input.

    Accepts the form's camelCase names (``heartRate``, ``spO2``...) or the
    attribute names (``heart_rate``, ``spo2``...). Missing or non-numeric values
    raise InvalidInput; nothing is silently replaced with 0.
    """
    if not isinstance(data, Mapping):
        raise InvalidInput("missing health metrics")
    values: Dict[str, float] = {}
    for attr, form_name in HEALTH_FIELDS:
        raw = data.get(form_name)
        if raw is None:
            raw = data.get(attr)
        values[attr] = _parse_number(form_name, raw)
    return HealthMetrics(**values)


class HealthRiskScorer:
    """Weighted threshold sum over the health metrics, scaled into [0, 100]."""

    def spo2_term(self, metrics: HealthMetrics) -> float:
        return (95 - metrics.spo2) * 5 if metrics.spo2 < 95 else 0.0

    def calorie_term(self, metrics: HealthMetrics) -> float:
        return (2000 - metrics.calories_burnt) * 0.015 if metrics.calories_burnt < 2000 else 0.0

    def terms(self, metrics: HealthMetrics) -> Dict[str, float]:
        return {
            "spO2": self.spo2_term(metrics),
            "caloriesBurnt": self.calorie_term(metrics),
            "muscleStiffness": metrics.muscle_stiffness * 10,
            "heartRate": abs(80 - metrics.heart_rate) * 0.5,
            "age": 20.0 if metrics.age > 55 else 0.0,
            "stepCount": 15.0 if metrics.step_count < 5000 else 0.0,
            "sleep": 10.0 if metrics.sleep < 6 else 0.0,
        }

    def score(self, metrics: HealthMetrics) -> float:
        terms = self.terms(metrics)
        score = min(100.0, max(0.0, sum(terms.values()) / 5))
        logger.debug("health score terms=%s score=%.2f", terms, score)
        return score

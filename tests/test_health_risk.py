"""Tests for health-metric parsing and the health risk scorer."""

import pytest

from parkinsoncare.models.errors import InvalidInput
from parkinsoncare.models.health_risk import HealthMetrics, HealthRiskScorer, parse_health_metrics
from parkinsoncare.models.recommendations import SeverityBand, classify


@pytest.fixture
def scorer():
    return HealthRiskScorer()


def _metrics(**overrides):
    values = dict(
        age=40,
        heart_rate=80,
        spo2=98,
        muscle_stiffness=0.0,
        calories_burnt=2500,
        sleep=8,
        step_count=8000,
    )
    values.update(overrides)
    return HealthMetrics(**values)


class TestHealthRiskScorer:
    def test_reference_example(self, scorer, health_example):
        metrics = parse_health_metrics(health_example)
        score = scorer.score(metrics)
        assert score == pytest.approx(4.0)
        assert classify(score) is SeverityBand.LOW

    def test_spo2_term(self, scorer):
        assert scorer.spo2_term(_metrics(spo2=95)) == 0.0
        assert scorer.spo2_term(_metrics(spo2=99)) == 0.0
        assert scorer.spo2_term(_metrics(spo2=90)) == pytest.approx(25.0)

    def test_calorie_term(self, scorer):
        assert scorer.calorie_term(_metrics(calories_burnt=2000)) == 0.0
        assert scorer.calorie_term(_metrics(calories_burnt=1000)) == pytest.approx(15.0)

    def test_flat_additions(self, scorer):
        terms = scorer.terms(_metrics(age=56, step_count=4999, sleep=5.5))
        assert terms["age"] == 20.0
        assert terms["stepCount"] == 15.0
        assert terms["sleep"] == 10.0
        terms = scorer.terms(_metrics(age=55, step_count=5000, sleep=6))
        assert terms["age"] == terms["stepCount"] == terms["sleep"] == 0.0

    def test_heart_rate_term_is_symmetric(self, scorer):
        assert scorer.terms(_metrics(heart_rate=60))["heartRate"] == pytest.approx(10.0)
        assert scorer.terms(_metrics(heart_rate=100))["heartRate"] == pytest.approx(10.0)

    def test_healthy_profile_scores_zero(self, scorer):
        assert scorer.score(_metrics()) == 0.0

    def test_clamped_to_upper_bound(self, scorer):
        metrics = _metrics(age=90, heart_rate=200, spo2=0, muscle_stiffness=1, calories_burnt=0, sleep=0, step_count=0)
        assert scorer.score(metrics) == 100.0

    def test_clamped_to_lower_bound(self, scorer):
        assert scorer.score(_metrics(muscle_stiffness=-100)) == 0.0

    def test_monotonic_in_muscle_stiffness(self, scorer):
        scores = [scorer.score(_metrics(muscle_stiffness=s / 10, spo2=90)) for s in range(0, 11)]
        assert scores == sorted(scores)
        assert scores[-1] > scores[0]


class TestParseHealthMetrics:
    def test_accepts_numeric_strings(self, health_example):
        data = {k: str(v) for k, v in health_example.items()}
        metrics = parse_health_metrics(data)
        assert metrics.heart_rate == 80.0
        assert metrics.spo2 == 95.0

    def test_accepts_attribute_names(self):
        metrics = parse_health_metrics(
            {
                "age": 70,
                "heart_rate": 72,
                "spo2": 97,
                "muscle_stiffness": 0.4,
                "calories_burnt": 1800,
                "sleep": 7.5,
                "step_count": 3000,
            }
        )
        assert metrics.muscle_stiffness == pytest.approx(0.4)
        assert metrics.step_count == 3000.0

    def test_round_trip_uses_form_names(self, health_example):
        assert parse_health_metrics(health_example).to_dict() == {
            k: float(v) for k, v in health_example.items()
        }

    @pytest.mark.parametrize("bad", ["abc", "", True, "nan", "inf", [1]])
    def test_rejects_non_numeric(self, health_example, bad):
        health_example["spO2"] = bad
        with pytest.raises(InvalidInput, match="spO2"):
            parse_health_metrics(health_example)

    def test_rejects_missing_field(self, health_example):
        del health_example["stepCount"]
        with pytest.raises(InvalidInput, match="stepCount"):
            parse_health_metrics(health_example)

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidInput):
            parse_health_metrics(None)

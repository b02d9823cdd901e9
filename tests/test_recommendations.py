import pytest

from parkinsoncare.models.recommendations import DISCLAIMER, SeverityBand, classify, recommend


@pytest.mark.parametrize(
    "score,band",
    [
        (0, SeverityBand.LOW),
        (29.99, SeverityBand.LOW),
        (30, SeverityBand.MODERATE),
        (59.99, SeverityBand.MODERATE),
        (60, SeverityBand.HIGH),
        (100, SeverityBand.HIGH),
    ],
)
def test_classify_boundaries(score, band):
    assert classify(score) is band


def test_labels():
    assert SeverityBand.LOW.label == "Low Risk"
    assert SeverityBand.MODERATE.label == "Moderate Risk"
    assert SeverityBand.HIGH.risk_level == "high"


def test_each_band_has_its_own_advice():
    lists = [recommend(band) for band in SeverityBand]
    assert all(len(items) == 6 for items in lists)
    assert len({tuple(items) for items in lists}) == 3
    assert recommend(SeverityBand.HIGH)[4].startswith("Speech Therapy")


def test_recommend_returns_a_copy():
    items = recommend(SeverityBand.LOW)
    items.clear()
    assert len(recommend(SeverityBand.LOW)) == 6


def test_disclaimer_is_separate_from_advice():
    assert DISCLAIMER.startswith("Note:")
    for band in SeverityBand:
        assert DISCLAIMER not in recommend(band)

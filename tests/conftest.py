"""Shared fixtures for ParkinsonCare tests."""

import io

import numpy as np
import pytest
import soundfile as sf

from parkinsoncare.app import create_app


HEALTH_EXAMPLE = {
    "age": 60,
    "heartRate": 80,
    "spO2": 95,
    "muscleStiffness": 0,
    "caloriesBurnt": 2000,
    "sleep": 6,
    "stepCount": 5000,
}


def make_wav_bytes(samples: np.ndarray, sample_rate: int = 16000) -> bytes:
    """Encode float samples as an in-memory 32-bit float WAV file."""
    buf = io.BytesIO()
    sf.write(buf, samples, sample_rate, format="WAV", subtype="FLOAT")
    return buf.getvalue()


@pytest.fixture
def health_example():
    """Metrics whose only active term is the age bonus (score 4)."""
    return dict(HEALTH_EXAMPLE)


@pytest.fixture
def silent_wav():
    """One second of silence at 16 kHz."""
    return make_wav_bytes(np.zeros(16000, dtype=np.float32), 16000)


@pytest.fixture
def app():
    """Flask app with an in-memory user store."""
    application = create_app({"TESTING": True, "USER_STORE_PATH": None})
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    """Register a user and return bearer headers for its session."""
    response = client.post(
        "/api/auth/register",
        json={"username": "tester", "email": "tester@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    token = response.get_json()["token"]
    return {"Authorization": f"Bearer {token}"}

import numpy as np
import pytest

from parkinsoncare.app import audio
from parkinsoncare.app.audio import AudioDecodeError, decode_audio, source_kind_for
from parkinsoncare.models.errors import InvalidInput
from parkinsoncare.models.voice_features import SourceKind

from .conftest import make_wav_bytes


def test_decode_mono_wav():
    samples = np.linspace(-0.5, 0.5, 800, dtype=np.float32)
    sample = decode_audio(make_wav_bytes(samples, 8000), SourceKind.UPLOADED)
    assert sample.sample_rate == 8000
    assert sample.source_kind is SourceKind.UPLOADED
    np.testing.assert_allclose(sample.samples, samples, atol=1e-6)


def test_decode_keeps_first_channel():
    left = np.full(400, 0.25, dtype=np.float32)
    right = np.full(400, -0.75, dtype=np.float32)
    sample = decode_audio(make_wav_bytes(np.stack([left, right], axis=1), 16000), "recorded")
    assert sample.source_kind is SourceKind.RECORDED
    np.testing.assert_allclose(sample.samples, left, atol=1e-6)


def test_empty_bytes_rejected():
    with pytest.raises(AudioDecodeError):
        decode_audio(b"")


def test_undecodable_without_ffmpeg(monkeypatch):
    monkeypatch.setattr(audio, "find_ffmpeg", lambda: None)
    with pytest.raises(AudioDecodeError, match="unsupported_audio_format"):
        decode_audio(b"definitely not audio" * 10, filename="clip.webm")


def test_decode_errors_are_invalid_input():
    assert issubclass(AudioDecodeError, InvalidInput)


@pytest.mark.parametrize(
    "mimetype,explicit,expected",
    [
        ("audio/webm", None, SourceKind.RECORDED),
        ("audio/webm;codecs=opus", None, SourceKind.RECORDED),
        ("audio/wav", None, SourceKind.UPLOADED),
        (None, None, SourceKind.UPLOADED),
        ("audio/webm", "uploaded", SourceKind.UPLOADED),
        ("audio/wav", " Recorded ", SourceKind.RECORDED),
    ],
)
def test_source_kind_for(mimetype, explicit, expected):
    assert source_kind_for(mimetype, explicit) is expected


def test_source_kind_for_unknown_value():
    with pytest.raises(InvalidInput):
        source_kind_for("audio/wav", "live")

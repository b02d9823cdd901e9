from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Sequence, Union

import numpy as np

from .errors import InvalidInput


logger = logging.getLogger(__name__)

BLOCK_SIZE = 1024
SILENCE_THRESHOLD = 0.01
TARGET_SPEECH_RATE = 3.0

TREMOR_CAP = 10.0
PITCH_CAP = 10.0
SPEECH_RATE_CAP = 5.0
VOICE_BREAK_CAP = 5.0
RAW_SCORE_MAX = TREMOR_CAP + PITCH_CAP + SPEECH_RATE_CAP + VOICE_BREAK_CAP


class SourceKind(str, Enum):
    RECORDED = "recorded"
    UPLOADED = "uploaded"

    @property
    def ceiling(self) -> float:
        # Live recordings are reported on a reduced scale.
        return 20.0 if self is SourceKind.RECORDED else 100.0


@dataclass(frozen=True, eq=False)
class AudioSample:
    """Decoded mono waveform with its sample rate and where it came from."""

    samples: np.ndarray
    sample_rate: int
    source_kind: SourceKind = SourceKind.UPLOADED

    def __init__(
        self,
        samples: Union[Sequence[float], np.ndarray],
        sample_rate: int,
        source_kind: Union[SourceKind, str] = SourceKind.UPLOADED,
    ) -> None:
        try:
            kind = SourceKind(source_kind)
        except ValueError:
            raise InvalidInput(f"unknown source kind: {source_kind!r}") from None
        try:
            rate = int(sample_rate)
        except (TypeError, ValueError):
            raise InvalidInput(f"sample rate must be an integer, got {sample_rate!r}") from None
        if rate <= 0:
            raise InvalidInput(f"sample rate must be positive, got {sample_rate!r}")
        data = np.array(samples, dtype=np.float64).reshape(-1)
        if data.size and not np.all(np.isfinite(data)):
            raise InvalidInput("audio samples must be finite")
        data.setflags(write=False)
        object.__setattr__(self, "samples", data)
        object.__setattr__(self, "sample_rate", rate)
        object.__setattr__(self, "source_kind", kind)

    def __len__(self) -> int:
        return int(self.samples.size)

    @property
    def duration_sec(self) -> float:
        return self.samples.size / self.sample_rate


@dataclass(frozen=True)
class VoiceAnalysis:
    tremor: float
    pitch_stability: float
    speech_rate: float
    voice_breaks: int
    voice_break_rate: float
    tremor_score: float
    pitch_score: float
    speech_rate_score: float
    voice_break_score: float
    score: float
    source_kind: SourceKind = field(default=SourceKind.UPLOADED)

    @property
    def raw_score(self) -> float:
        return self.tremor_score + self.pitch_score + self.speech_rate_score + self.voice_break_score

    def to_dict(self) -> Dict[str, Union[float, int, str]]:
        return {
            "tremor": round(self.tremor, 4),
            "pitchStability": round(self.pitch_stability, 4),
            "speechRate": round(self.speech_rate, 4),
            "voiceBreaks": self.voice_breaks,
            "voiceBreakRate": round(self.voice_break_rate, 4),
            "tremorScore": round(self.tremor_score, 4),
            "pitchScore": round(self.pitch_score, 4),
            "speechRateScore": round(self.speech_rate_score, 4),
            "voiceBreakScore": round(self.voice_break_score, 4),
            "sourceKind": self.source_kind.value,
        }


def tremor_metric(samples: np.ndarray) -> float:
    """Mean absolute change between consecutive sample magnitudes, scaled by 1000."""
    n = samples.size
    if n < 2:
        return 0.0
    magnitudes = np.abs(samples)
    return float(np.sum(np.abs(np.diff(magnitudes))) / n * 1000.0)


def pitch_stability_metric(samples: np.ndarray, block_size: int = BLOCK_SIZE) -> float:
    n = samples.size
    if n == 0:
        return 1.0
    # Blocks start at every offset strictly below n - block_size.
    n_blocks = len(range(0, n - block_size, block_size))
    if n_blocks == 0:
        return 1.0
    blocks = np.abs(samples[: n_blocks * block_size]).reshape(n_blocks, block_size)
    accumulated = float(np.sum(np.mean(blocks, axis=1)))
    return max(0.0, 1.0 - accumulated / (n / block_size))


def zero_crossings(samples: np.ndarray) -> int:
    if samples.size < 2:
        return 0
    return int(np.count_nonzero(samples[1:] * samples[:-1] < 0))


def silence_onsets(samples: np.ndarray, threshold: float = SILENCE_THRESHOLD) -> int:
    """Count falling edges into silence, starting outside a silence run."""
    if samples.size == 0:
        return 0
    silent = np.abs(samples) <= threshold
    onsets = int(silent[0])
    onsets += int(np.count_nonzero(~silent[:-1] & silent[1:]))
    return onsets


class VoiceRiskScorer:
    """Heuristic Parkinson's risk score from amplitude statistics of a voice clip."""

    def __init__(self, block_size: int = BLOCK_SIZE, silence_threshold: float = SILENCE_THRESHOLD):
        self.block_size = block_size
        self.silence_threshold = silence_threshold

    def analyze(self, sample: AudioSample) -> VoiceAnalysis:
        if sample.sample_rate <= 0:
            raise InvalidInput(f"sample rate must be positive, got {sample.sample_rate!r}")

        x = sample.samples
        duration = sample.duration_sec

        tremor = tremor_metric(x)
        pitch_stability = pitch_stability_metric(x, self.block_size)
        crossings = zero_crossings(x)
        breaks = silence_onsets(x, self.silence_threshold)
        speech_rate = crossings / duration if duration > 0 else 0.0
        voice_break_rate = breaks / duration if duration > 0 else 0.0

        tremor_score = min(TREMOR_CAP, tremor * 50)
        pitch_score = min(PITCH_CAP, (1 - pitch_stability) * 50)
        speech_rate_score = min(SPEECH_RATE_CAP, abs(TARGET_SPEECH_RATE - speech_rate) * 5)
        voice_break_score = min(VOICE_BREAK_CAP, voice_break_rate * 10)

        raw = tremor_score + pitch_score + speech_rate_score + voice_break_score
        ceiling = sample.source_kind.ceiling
        score = min(ceiling, max(0.0, raw * (ceiling / RAW_SCORE_MAX)))

        logger.debug(
            "voice analysis: n=%d sr=%d tremor=%.3f pitch_stability=%.3f speech_rate=%.3f "
            "voice_breaks=%d voice_break_rate=%.3f score=%.2f kind=%s",
            x.size,
            sample.sample_rate,
            tremor,
            pitch_stability,
            speech_rate,
            breaks,
            voice_break_rate,
            score,
            sample.source_kind.value,
        )

        return VoiceAnalysis(
            tremor=tremor,
            pitch_stability=pitch_stability,
            speech_rate=speech_rate,
            voice_breaks=breaks,
            voice_break_rate=voice_break_rate,
            tremor_score=tremor_score,
            pitch_score=pitch_score,
            speech_rate_score=speech_rate_score,
            voice_break_score=voice_break_score,
            score=score,
            source_kind=sample.source_kind,
        )

    def score(self, sample: AudioSample) -> float:
        return self.analyze(sample).score

"""Decoding of uploaded and recorded audio into AudioSample values."""

from __future__ import annotations

import io
import logging
import os
import shutil
import subprocess
import tempfile
from typing import Optional, Tuple, Union

import numpy as np
import soundfile as sf

from ..models.errors import InvalidInput
from ..models.voice_features import AudioSample, SourceKind


logger = logging.getLogger(__name__)

RECORDED_MIMETYPES = ("audio/webm",)


class AudioDecodeError(InvalidInput):
    pass


def source_kind_for(mimetype: Optional[str], explicit: Optional[str] = None) -> SourceKind:
    """Pick the source kind: an explicit value wins, browser recordings arrive as WebM."""
    if explicit:
        try:
            return SourceKind(explicit.strip().lower())
        except ValueError:
            raise InvalidInput(f"unknown source kind: {explicit!r}") from None
    base = (mimetype or "").split(";", 1)[0].strip().lower()
    return SourceKind.RECORDED if base in RECORDED_MIMETYPES else SourceKind.UPLOADED


def find_ffmpeg() -> Optional[str]:
    """Locate ffmpeg. Priority: env var FFMPEG_PATH > PATH lookup."""
    env_path = os.getenv("FFMPEG_PATH")
    if env_path and os.path.exists(env_path):
        return env_path
    return shutil.which("ffmpeg")


def _read_first_channel(data: bytes) -> Tuple[np.ndarray, int]:
    audio_data, sr = sf.read(io.BytesIO(data), dtype="float64", always_2d=True)
    return audio_data[:, 0], int(sr)


def _transcode_to_wav(data: bytes, ffmpeg_path: str, suffix: str) -> bytes:
    tmp_in_path = None
    tmp_out_path = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp_in:
            tmp_in.write(data)
            tmp_in_path = tmp_in.name
        with tempfile.NamedTemporaryFile(delete=False, suffix=".wav") as tmp_out:
            tmp_out_path = tmp_out.name
        subprocess.run(
            [
                ffmpeg_path,
                "-y",
                "-i",
                tmp_in_path,
                "-vn",
                "-ac",
                "1",
                "-acodec",
                "pcm_f32le",
                "-f",
                "wav",
                tmp_out_path,
            ],
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        with open(tmp_out_path, "rb") as f:
            return f.read()
    finally:
        for path in (tmp_in_path, tmp_out_path):
            if path and os.path.exists(path):
                os.remove(path)


def decode_audio(
    data: bytes,
    source_kind: Union[SourceKind, str] = SourceKind.UPLOADED,
    filename: Optional[str] = None,
) -> AudioSample:
    """Decode audio bytes with soundfile, falling back to an ffmpeg transcode.

    Multi-channel audio keeps only its first channel.
    """
    if not data:
        raise AudioDecodeError("no_audio_data")

    try:
        samples, sr = _read_first_channel(data)
    except (sf.LibsndfileError, RuntimeError, TypeError) as exc:
        ffmpeg_path = find_ffmpeg()
        if ffmpeg_path is None:
            logger.warning("decode_audio: soundfile failed (%s) and ffmpeg not found", exc)
            raise AudioDecodeError("unsupported_audio_format") from exc
        suffix = os.path.splitext(filename or "")[1] or ".webm"
        logger.info("decode_audio: transcoding %d bytes via ffmpeg (%s)", len(data), suffix)
        try:
            samples, sr = _read_first_channel(_transcode_to_wav(data, ffmpeg_path, suffix))
        except (subprocess.CalledProcessError, sf.LibsndfileError, RuntimeError) as exc2:
            raise AudioDecodeError("audio_decode_failed") from exc2

    logger.debug("decode_audio: samples=%d sample_rate=%d kind=%s", samples.size, sr, source_kind)
    return AudioSample(samples, sr, source_kind)

"""Command-line scoring for ParkinsonCare - runs the scorers without the web app."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .app.assessment import Assessment, health_assessment, voice_assessment
from .app.audio import decode_audio
from .app.report import build_assessment_report
from .models.errors import InvalidInput
from .models.health_risk import HealthRiskScorer, parse_health_metrics
from .models.recommendations import DISCLAIMER
from .models.voice_features import SourceKind, VoiceRiskScorer


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="parkinsoncare", description="Heuristic Parkinson's risk screening")
    ap.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    sub = ap.add_subparsers(dest="command", required=True)

    voice = sub.add_parser("voice", help="Score an audio file")
    voice.add_argument("file", help="Audio file (WAV/FLAC/OGG; WebM needs ffmpeg)")
    voice.add_argument(
        "--recorded",
        action="store_true",
        help="Treat the clip as a live recording (score capped at 20)",
    )
    voice.add_argument("--report", help="Write a PDF report to this path")

    health = sub.add_parser("health", help="Score health metrics")
    health.add_argument("--age", required=True)
    health.add_argument("--heart-rate", required=True)
    health.add_argument("--spo2", required=True)
    health.add_argument("--muscle-stiffness", required=True)
    health.add_argument("--calories-burnt", required=True)
    health.add_argument("--sleep", required=True)
    health.add_argument("--step-count", required=True)
    health.add_argument("--report", help="Write a PDF report to this path")
    return ap


def _score_voice(args: argparse.Namespace) -> Assessment:
    with open(args.file, "rb") as f:
        data = f.read()
    kind = SourceKind.RECORDED if args.recorded else SourceKind.UPLOADED
    sample = decode_audio(data, kind, args.file)
    analysis = VoiceRiskScorer().analyze(sample)
    return voice_assessment(analysis)


def _score_health(args: argparse.Namespace) -> Assessment:
    metrics = parse_health_metrics(
        {
            "age": args.age,
            "heartRate": args.heart_rate,
            "spO2": args.spo2,
            "muscleStiffness": args.muscle_stiffness,
            "caloriesBurnt": args.calories_burnt,
            "sleep": args.sleep,
            "stepCount": args.step_count,
        }
    )
    return health_assessment(metrics, HealthRiskScorer().score(metrics))


def _print_assessment(assessment: Assessment) -> None:
    print(f"Assessment: {assessment.kind}")
    print(f"Score: {assessment.score:.2f}%")
    print(f"Severity: {assessment.band.label}")
    print("Recommendations:")
    for rec in assessment.recommendations:
        print(f"  - {rec}")
    print()
    print(DISCLAIMER)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        if args.command == "voice":
            assessment = _score_voice(args)
        else:
            assessment = _score_health(args)
    except (InvalidInput, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _print_assessment(assessment)

    if args.report:
        try:
            with open(args.report, "wb") as f:
                f.write(build_assessment_report(assessment))
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(f"Report written to {args.report}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

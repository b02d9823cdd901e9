"""ParkinsonCare: heuristic Parkinson's screening from voice clips and health metrics."""

__version__ = "1.0.0"

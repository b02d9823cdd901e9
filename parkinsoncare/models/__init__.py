"""Risk scoring models and utilities.

Modules:
- voice_features: waveform metrics and the voice risk scorer
- health_risk: health-metric parsing and the health risk scorer
- recommendations: severity bands and advice tables
"""

__all__ = [
    "errors",
    "voice_features",
    "health_risk",
    "recommendations",
]

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


LOW_THRESHOLD = 30.0
HIGH_THRESHOLD = 60.0

DISCLAIMER = (
    "Note: This assessment is for screening purposes only and should not be considered "
    "a medical diagnosis. Please consult with a healthcare professional for proper "
    "medical evaluation."
)


class SeverityBand(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"

    @property
    def label(self) -> str:
        return f"{self.value} Risk"

    @property
    def risk_level(self) -> str:
        return self.value.lower()


# Background and text colours (RGB 0-255) used by the PDF report
BAND_COLORS: Dict[SeverityBand, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    SeverityBand.LOW: ((46, 204, 113), (255, 255, 255)),
    SeverityBand.MODERATE: ((243, 156, 18), (0, 0, 0)),
    SeverityBand.HIGH: ((231, 76, 60), (255, 255, 255)),
}

_ADVICE: Dict[SeverityBand, Tuple[str, ...]] = {
    SeverityBand.LOW: (
        "Exercise: 30-60 min of aerobic exercise (walking, cycling, swimming) & strength training 3-4x/week",
        "Diet: Mediterranean diet (rich in antioxidants, omega-3, whole grains, fruits, and vegetables)",
        "Sleep: 7-8 hours of quality sleep, avoid caffeine/alcohol before bed",
        "Stress Management: Yoga, meditation, and social engagement to reduce anxiety",
        "Medical Monitoring: Regular neurologist checkups, track symptoms with a wearable device",
        "Supplements: Consult a doctor about vitamin D, B12, and coenzyme Q10 for neuroprotection",
    ),
    SeverityBand.MODERATE: (
        "Exercise: Physical therapy + daily walking, stretching, balance exercises, tai chi",
        "Diet: High-protein meals timed correctly (protein can interfere with some medications)",
        "Sleep: Improve sleep hygiene, use weighted blankets, and consider melatonin if needed",
        "Medication: Start Parkinson's meds as prescribed, monitor for side effects",
        "Fall Prevention: Use handrails, non-slip mats, and supportive shoes",
        "Cognitive Health: Engage in brain-stimulating activities (reading, puzzles, learning new skills)",
    ),
    SeverityBand.HIGH: (
        "Physical Therapy: Daily mobility exercises, assistive devices (walkers, handrails, wheelchair if needed)",
        "Diet: Soft foods (if swallowing is difficult), high-fiber diet to prevent constipation",
        "Sleep Management: Adjustable beds, nighttime movement assistance, melatonin for sleep regulation",
        "Medication Adjustment: Monitor effectiveness of levodopa and adjust doses with a neurologist",
        "Speech Therapy: Work on voice strength and swallowing exercises",
        "Caregiver Support: Daily assistance with movement, hygiene, and emotional support",
    ),
}


def classify(score: float) -> SeverityBand:
    if score < LOW_THRESHOLD:
        return SeverityBand.LOW
    if score < HIGH_THRESHOLD:
        return SeverityBand.MODERATE
    return SeverityBand.HIGH


def recommend(band: SeverityBand) -> List[str]:
    return list(_ADVICE[SeverityBand(band)])

"""Static educational content served alongside assessment results."""

from __future__ import annotations

from typing import Dict, List


EDUCATION_SECTIONS: Dict[str, Dict[str, str]] = {
    "overview": {
        "title": "Understanding Parkinson's Disease",
        "content": (
            "Parkinson's disease is a progressive neurological disorder that affects movement. "
            "It occurs when nerve cells (neurons) in the brain that produce dopamine begin to die. "
            "Dopamine is a neurotransmitter that helps control movement and emotional responses.\n\n"
            "Key Facts:\n"
            "• Affects approximately 1% of people over 60 years old\n"
            "• More common in men than women\n"
            "• Usually develops after age 50\n"
            "• Can occur earlier (early-onset Parkinson's)"
        ),
    },
    "symptoms": {
        "title": "Common Symptoms",
        "content": (
            "Primary Motor Symptoms:\n"
            "• Tremors (shaking) in hands, arms, legs, jaw, or head\n"
            "• Muscle stiffness or rigidity\n"
            "• Slowness of movement (bradykinesia)\n"
            "• Impaired balance and coordination\n\n"
            "Secondary Symptoms:\n"
            "• Depression and anxiety\n"
            "• Sleep problems\n"
            "• Cognitive changes\n"
            "• Speech and swallowing difficulties\n"
            "• Constipation\n"
            "• Fatigue\n"
            "• Loss of smell"
        ),
    },
    "stages": {
        "title": "Disease Progression",
        "content": (
            "Parkinson's disease typically progresses through five stages:\n\n"
            "Stage 1: Mild symptoms, usually on one side of the body\n"
            "Stage 2: Symptoms on both sides, but balance is not affected\n"
            "Stage 3: Balance problems, but still independent\n"
            "Stage 4: Severe symptoms, but can still walk or stand\n"
            "Stage 5: Wheelchair-bound or bedridden, requires constant care"
        ),
    },
    "treatment": {
        "title": "Treatment Options",
        "content": (
            "Current treatment approaches include:\n\n"
            "1. Medications:\n"
            "• Levodopa (most effective)\n"
            "• Dopamine agonists\n"
            "• MAO-B inhibitors\n"
            "• COMT inhibitors\n\n"
            "2. Surgical Options:\n"
            "• Deep Brain Stimulation (DBS)\n"
            "• Focused ultrasound\n\n"
            "3. Lifestyle Management:\n"
            "• Regular exercise\n"
            "• Physical therapy\n"
            "• Occupational therapy\n"
            "• Speech therapy\n"
            "• Dietary modifications"
        ),
    },
}


def education_sections() -> List[Dict[str, str]]:
    return [{"id": key, **section} for key, section in EDUCATION_SECTIONS.items()]

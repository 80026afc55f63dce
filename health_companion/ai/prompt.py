from __future__ import annotations


def build_diagnosis_prompt(symptoms: str) -> str:
    """Wrap the user's symptom description in the preliminary-advice instruction."""
    return f'根据症状："{symptoms}"，请给出初步的健康建议和可能的原因。'

from __future__ import annotations

from pydantic import Field

from health_companion.api.schemas import Envelope
from health_companion.domain.models import CamelModel


class DiagnosisIn(CamelModel):
    symptoms: str | None = Field(
        default=None,
        description="Free-text symptom description. Required.",
        examples=["头痛"],
    )


class AskIn(CamelModel):
    question: str | None = Field(
        default=None,
        description="Free-form health question. Required.",
        examples=["血压高怎么办"],
    )


class TtsIn(CamelModel):
    text: str | None = Field(default=None, description="Text to speak. Ignored by the mock.")


class DiagnosisOut(Envelope):
    diagnosis: str = Field(description="Generated advice; may be empty when the model returned nothing usable.")


class AnswerOut(Envelope):
    answer: str = Field(description="Generated answer; may be empty when the model returned nothing usable.")


class TtsOut(Envelope):
    audio_url: str = Field(description="URL of the generated audio.")

from __future__ import annotations

from pydantic import BaseModel, Field

from health_companion.domain.models import CamelModel


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class Envelope(CamelModel):
    """Every JSON response carries `code`; `0` means success."""

    code: int = Field(default=0, description="`0` on success, otherwise the HTTP status.")


class MessageOut(Envelope):
    msg: str = Field(description="Human-readable status message.", examples=["保存成功"])


class ErrorOut(Envelope):
    code: int = Field(description="HTTP status of the failure.", examples=[400])
    msg: str = Field(description="Human-readable error message.", examples=["症状是必填项"])

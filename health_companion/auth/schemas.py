from __future__ import annotations

from pydantic import Field

from health_companion.api.schemas import MessageOut
from health_companion.domain.models import UserSummary


class LoginOut(MessageOut):
    token: str = Field(description="Opaque session token; send as `Authorization: Bearer <token>`.")
    user: UserSummary

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models; the mobile client expects camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserSummary(CamelModel):
    id: int = Field(description="User identifier. `0` is the guest account.", examples=[1])
    name: str = Field(description="Display name.", examples=["李大爷"])


class UserProfile(UserSummary):
    phone: str = Field(description="Masked phone number.", examples=["138****8888"])


class ScheduledDose(CamelModel):
    time: str = Field(description="Time of day (HH:MM).", examples=["08:00"])
    name: str = Field(description="Medicine name.", examples=["降压药"])
    status: str = Field(description="Intake status.", examples=["待服用"])


class MedicineReminder(ScheduledDose):
    id: int = Field(description="Reminder identifier.", examples=[1])


class Discussion(CamelModel):
    id: int
    user: str
    content: str


class NewsItem(CamelModel):
    id: int
    title: str
    content: str


class HeartRateTrend(CamelModel):
    dates: list[str] = Field(description="Day labels (MM-DD), oldest first.")
    heart_rate: list[int] = Field(description="Average heart rate per day label.")


class HealthHome(CamelModel):
    heart_rate: int
    blood_pressure: str
    sleep: float = Field(description="Hours slept last night.")
    sleep_quality: int
    medicine_remind: list[ScheduledDose]
    trend: HeartRateTrend


class HealthRecordEntry(CamelModel):
    type: str = Field(description="Record category: history|report|doctor.")
    title: str
    desc: str

"""In-memory seed data served by the mock endpoints.

A fresh store is built at application startup and lives on `app.state`; it is
lost on restart. Write endpoints acknowledge requests without changing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Request

from health_companion.domain.models import (
    Discussion,
    HealthHome,
    HealthRecordEntry,
    HeartRateTrend,
    MedicineReminder,
    NewsItem,
    ScheduledDose,
    UserProfile,
    UserSummary,
)

GUEST_USER = UserSummary(id=0, name="体验用户")


@dataclass
class MockDataStore:
    profile: UserProfile
    health_home: HealthHome
    reminders: list[MedicineReminder] = field(default_factory=list)
    discussions: list[Discussion] = field(default_factory=list)
    news: list[NewsItem] = field(default_factory=list)
    health_records: list[HealthRecordEntry] = field(default_factory=list)

    @property
    def account_user(self) -> UserSummary:
        return UserSummary(id=self.profile.id, name=self.profile.name)


def seed_mock_data() -> MockDataStore:
    """Return a new store filled with the demo dataset."""
    return MockDataStore(
        profile=UserProfile(id=1, name="李大爷", phone="138****8888"),
        reminders=[MedicineReminder(id=1, time="08:00", name="降压药", status="待服用")],
        discussions=[Discussion(id=1, user="张阿姨", content="最近睡眠质量不太好...")],
        news=[NewsItem(id=1, title="如何健康饮食", content="...")],
        health_home=HealthHome(
            heart_rate=72,
            blood_pressure="120/80",
            sleep=7.5,
            sleep_quality=15,
            medicine_remind=[
                ScheduledDose(time="08:00", name="降压药", status="待服用"),
                ScheduledDose(time="12:00", name="糖尿病药", status="已服用"),
            ],
            trend=HeartRateTrend(dates=["05-20", "05-21", "05-22"], heart_rate=[74, 73, 72]),
        ),
        health_records=[
            HealthRecordEntry(type="history", title="健康历史记录", desc="..."),
            HealthRecordEntry(type="report", title="医院检查报告", desc="..."),
            HealthRecordEntry(type="doctor", title="医生诊疗记录", desc="..."),
        ],
    )


def get_mock_data(request: Request) -> MockDataStore:
    return request.app.state.mock_data

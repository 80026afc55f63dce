from __future__ import annotations

from fastapi import APIRouter, Depends

from health_companion.api.schemas import Envelope
from health_companion.auth.store import require_session
from health_companion.domain.mock_data import MockDataStore, get_mock_data
from health_companion.domain.models import HealthHome, HealthRecordEntry

router = APIRouter(prefix="/health", tags=["health-data"], dependencies=[Depends(require_session)])


class HealthHomeOut(Envelope):
    data: HealthHome


class HealthRecordsOut(Envelope):
    records: list[HealthRecordEntry]


@router.get("/home", response_model=HealthHomeOut)
async def get_health_home(data: MockDataStore = Depends(get_mock_data)) -> HealthHomeOut:
    """Dashboard numbers (vitals, today's doses, heart-rate trend). Static demo data."""
    return HealthHomeOut(data=data.health_home)


@router.get("/records", response_model=HealthRecordsOut)
async def get_health_records(data: MockDataStore = Depends(get_mock_data)) -> HealthRecordsOut:
    return HealthRecordsOut(records=data.health_records)

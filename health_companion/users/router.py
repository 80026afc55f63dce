from __future__ import annotations

from fastapi import APIRouter, Depends

from health_companion.api.schemas import Envelope
from health_companion.auth.store import require_session
from health_companion.domain.mock_data import MockDataStore, get_mock_data
from health_companion.domain.models import UserProfile

router = APIRouter(prefix="/user", tags=["users"], dependencies=[Depends(require_session)])


class UserProfileOut(Envelope):
    user: UserProfile


@router.get("/profile", response_model=UserProfileOut)
async def get_profile(data: MockDataStore = Depends(get_mock_data)) -> UserProfileOut:
    return UserProfileOut(user=data.profile)

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field

from health_companion.api.schemas import Envelope, MessageOut
from health_companion.auth.store import require_session
from health_companion.domain.mock_data import MockDataStore, get_mock_data
from health_companion.domain.models import MedicineReminder

router = APIRouter(prefix="/medicine", tags=["medicine"], dependencies=[Depends(require_session)])


class RemindListOut(Envelope):
    remind_list: list[MedicineReminder] = Field(description="Configured medicine reminders.")


@router.get("/remind", response_model=RemindListOut)
async def list_reminders(data: MockDataStore = Depends(get_mock_data)) -> RemindListOut:
    return RemindListOut(remind_list=data.reminders)


# Save and delete acknowledge the request; the demo list is not modified.
@router.post("/remind", response_model=MessageOut)
async def save_reminder() -> MessageOut:
    return MessageOut(msg="保存成功")


@router.delete("/remind", response_model=MessageOut)
async def delete_reminder() -> MessageOut:
    return MessageOut(msg="删除成功")

from __future__ import annotations

from fastapi import APIRouter, Depends

from health_companion.api.schemas import Envelope, MessageOut
from health_companion.auth.store import require_session
from health_companion.domain.mock_data import MockDataStore, get_mock_data
from health_companion.domain.models import Discussion, NewsItem

router = APIRouter(prefix="/community", tags=["community"], dependencies=[Depends(require_session)])


class NewsListOut(Envelope):
    news: list[NewsItem]


class DiscussListOut(Envelope):
    discuss: list[Discussion]


@router.get("/news", response_model=NewsListOut)
async def list_news(data: MockDataStore = Depends(get_mock_data)) -> NewsListOut:
    return NewsListOut(news=data.news)


@router.get("/discuss", response_model=DiscussListOut)
async def list_discussions(data: MockDataStore = Depends(get_mock_data)) -> DiscussListOut:
    return DiscussListOut(discuss=data.discussions)


@router.post("/discuss", response_model=MessageOut)
async def post_discussion() -> MessageOut:
    return MessageOut(msg="发布成功")

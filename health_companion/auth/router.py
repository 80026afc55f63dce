from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from health_companion.api.schemas import MessageOut
from health_companion.auth.schemas import LoginOut
from health_companion.auth.store import TokenStore, get_token_store
from health_companion.core.middleware.http_logging import request_id_of
from health_companion.domain.mock_data import GUEST_USER, MockDataStore, get_mock_data
from health_companion.domain.models import UserSummary

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("health_companion.auth")

LOGIN_OK_MSG = "登录成功"


def _login(*, request: Request, store: TokenStore, user: UserSummary, method: str) -> LoginOut:
    token = store.issue()
    # Never log the token itself.
    logger.info(
        "Session issued",
        extra={"request_id": request_id_of(request), "outcome": method},
    )
    return LoginOut(msg=LOGIN_OK_MSG, token=token, user=user)


@router.post("/send-code", response_model=MessageOut)
async def send_code() -> MessageOut:
    return MessageOut(msg="验证码已发送")


@router.post("/login-phone", response_model=LoginOut)
async def login_phone(
    request: Request,
    store: TokenStore = Depends(get_token_store),
    data: MockDataStore = Depends(get_mock_data),
) -> LoginOut:
    return _login(request=request, store=store, user=data.account_user, method="phone")


@router.post("/login-account", response_model=LoginOut)
async def login_account(
    request: Request,
    store: TokenStore = Depends(get_token_store),
    data: MockDataStore = Depends(get_mock_data),
) -> LoginOut:
    return _login(request=request, store=store, user=data.account_user, method="account")


@router.post("/guest-login", response_model=LoginOut)
async def guest_login(
    request: Request,
    store: TokenStore = Depends(get_token_store),
) -> LoginOut:
    return _login(request=request, store=store, user=GUEST_USER, method="guest")


@router.post("/forgot-password", response_model=MessageOut)
async def forgot_password() -> MessageOut:
    return MessageOut(msg="新密码已发送到手机")

"""Unit tests for the HTTP logging middleware.

Structured fields are asserted via `caplog` rather than message strings.
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from health_companion.core.middleware.http_logging import (
    HttpLoggingMiddleware,
    request_id_of,
    route_template,
)


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(HttpLoggingMiddleware)

    @app.post("/ai/ask")
    async def ask() -> dict[str, str]:
        return {"answer": "ok"}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    return app


def _http_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "health_companion.http"]


def test_success_generates_request_id_and_logs_metadata_only(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="health_companion.http")

    with TestClient(_make_app()) as client:
        res = client.post("/ai/ask?lang=zh", json={"question": "血压高怎么办"})

    assert res.status_code == 200
    assert res.headers["x-request-id"]

    info_records = [r for r in _http_records(caplog) if r.levelno == logging.INFO]
    assert len(info_records) == 1
    record = info_records[0]
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["http_method"] == "POST"
    assert record.__dict__["request_path"] == "/ai/ask"
    assert record.__dict__["status_code"] == 200
    assert record.__dict__["duration_ms"] >= 0
    assert "血压高" not in record.getMessage()


@pytest.mark.parametrize(
    ("sent", "propagated"),
    [("req_abc-123", True), ("bad id with spaces", False), ("x" * 200, False)],
)
def test_request_id_is_propagated_only_when_safe(sent: str, propagated: bool) -> None:
    with TestClient(_make_app()) as client:
        res = client.post("/ai/ask", headers={"X-Request-ID": sent})

    assert (res.headers["x-request-id"] == sent) is propagated


def _request_id_app(*, with_middleware: bool) -> FastAPI:
    app = FastAPI()
    if with_middleware:
        app.add_middleware(HttpLoggingMiddleware)

    @app.get("/whoami")
    async def whoami(request: Request) -> dict[str, str | None]:
        return {"request_id": request_id_of(request)}

    return app


def test_handlers_see_validated_request_id_not_raw_header() -> None:
    with TestClient(_request_id_app(with_middleware=True)) as client:
        res = client.get("/whoami", headers={"X-Request-ID": "bad id with spaces"})

    assert res.json()["request_id"] == res.headers["x-request-id"]
    assert res.json()["request_id"] != "bad id with spaces"


def test_request_id_is_none_without_middleware() -> None:
    with TestClient(_request_id_app(with_middleware=False)) as client:
        res = client.get("/whoami", headers={"X-Request-ID": "req_abc-123"})

    assert res.json() == {"request_id": None}


def test_route_template_uses_matched_route_or_unmatched() -> None:
    app = FastAPI()

    @app.get("/items/{item_id}")
    async def item(item_id: int, request: Request) -> dict[str, str]:
        return {"label": route_template(request)}

    with TestClient(app) as client:
        res = client.get("/items/42")

    assert res.json() == {"label": "/items/{item_id}"}
    assert route_template(Request({"type": "http", "path": "/items/42"})) == "unmatched"


def test_unhandled_exception_logs_error_with_stack_trace(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="health_companion.http")

    with TestClient(_make_app(), raise_server_exceptions=False) as client:
        res = client.get("/boom", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500

    error_records = [r for r in _http_records(caplog) if r.levelno == logging.ERROR]
    assert len(error_records) == 1
    record = error_records[0]
    assert record.__dict__["request_id"] == "req_err_001"
    assert record.__dict__["request_path"] == "/boom"
    assert record.__dict__["status_code"] == 500
    assert record.exc_info

"""Unit tests for the completion client (no network: httpx.MockTransport)."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from health_companion.ai.prompt import build_diagnosis_prompt
from health_companion.core.llm.completion_client import (
    CompletionNotConfiguredError,
    CompletionUpstreamError,
    extract_completion_text,
)
from health_companion.core.settings import DEFAULT_COMPLETION_URL
from tests._helpers import RecordingUpstream, make_completion_client


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_fails_without_network_call(api_key: str | None) -> None:
    upstream = RecordingUpstream(body={"choices": [{"text": "unused"}]})
    client = make_completion_client(upstream, api_key=api_key)

    with pytest.raises(CompletionNotConfiguredError):
        asyncio.run(client.complete("头痛"))

    assert upstream.requests == []
    assert client.is_configured is False


def test_request_shape_matches_upstream_contract() -> None:
    upstream = RecordingUpstream(body={"choices": [{"text": "ok"}]})
    client = make_completion_client(upstream, api_key="secret-key")

    asyncio.run(client.complete("头痛", prompt_template=build_diagnosis_prompt))

    assert len(upstream.requests) == 1
    sent = upstream.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == DEFAULT_COMPLETION_URL
    assert sent.headers["Authorization"] == "Bearer secret-key"
    assert sent.headers["Content-Type"] == "application/json"
    assert upstream.last_json == {
        "model": "jiutian-lan",
        "prompt": '根据症状："头痛"，请给出初步的健康建议和可能的原因。',
        "max_tokens": 200,
    }


def test_default_template_passes_text_through() -> None:
    upstream = RecordingUpstream(body={"choices": [{"text": "ok"}]})
    client = make_completion_client(upstream)

    asyncio.run(client.complete("血压高怎么办"))

    assert upstream.last_json["prompt"] == "血压高怎么办"


@pytest.mark.parametrize("status_code", [400, 401, 429, 500, 503])
def test_error_status_raises_upstream_error_regardless_of_body(status_code: int) -> None:
    # Even a well-formed completion body is ignored on a failure status.
    upstream = RecordingUpstream(status_code=status_code, body={"choices": [{"text": "建议"}]})
    client = make_completion_client(upstream)

    with pytest.raises(CompletionUpstreamError) as excinfo:
        asyncio.run(client.complete("头痛"))

    assert excinfo.value.status_code == status_code
    assert "建议" in excinfo.value.body


def test_transport_failure_raises_upstream_error_without_status() -> None:
    upstream = RecordingUpstream(
        error=lambda request: httpx.ConnectError("connection refused", request=request)
    )
    client = make_completion_client(upstream)

    with pytest.raises(CompletionUpstreamError) as excinfo:
        asyncio.run(client.complete("头痛"))

    assert excinfo.value.status_code is None
    assert excinfo.value.body is None


def test_timeout_raises_upstream_error() -> None:
    upstream = RecordingUpstream(
        error=lambda request: httpx.ReadTimeout("timed out", request=request)
    )
    client = make_completion_client(upstream)

    with pytest.raises(CompletionUpstreamError, match="timed out"):
        asyncio.run(client.complete("头痛"))


def test_success_returns_extracted_text() -> None:
    upstream = RecordingUpstream(body=r'{"choices":[{"text":"A\\nB "}]}')
    client = make_completion_client(upstream)

    assert asyncio.run(client.complete("q")) == "A\nB"


@pytest.mark.parametrize("body", ['{"choices":[]}', "{}", "upstream says hi"])
def test_unusable_success_body_returns_empty_string(body: str) -> None:
    upstream = RecordingUpstream(body=body)
    client = make_completion_client(upstream)

    assert asyncio.run(client.complete("q")) == ""


def test_identical_calls_give_identical_results() -> None:
    upstream = RecordingUpstream(body={"choices": [{"text": "  多喝水\\n早点睡  "}]})
    client = make_completion_client(upstream)

    first = asyncio.run(client.complete("失眠"))
    second = asyncio.run(client.complete("失眠"))

    assert first == second == "多喝水\n早点睡"
    assert len(upstream.requests) == 2
    assert upstream.requests[0].content == upstream.requests[1].content


def test_extract_converts_escaped_newlines_and_trims() -> None:
    assert extract_completion_text(r'{"choices":[{"text":"A\\nB "}]}') == "A\nB"


def test_extract_uses_only_first_choice() -> None:
    body = '{"choices":[{"text":"first"},{"text":"second"}]}'
    assert extract_completion_text(body) == "first"


@pytest.mark.parametrize(
    "body",
    [
        "",
        "not json",
        "null",
        "[]",
        '"text"',
        '{"choices": null}',
        '{"choices": "abc"}',
        '{"choices": [null]}',
        '{"choices": [{}]}',
        '{"choices": [{"text": ""}]}',
        '{"choices": [{"text": 42}]}',
        pytest.param("[" * 100_000, id="deeply-nested-array"),
        pytest.param('{"choices":' + "[" * 100_000, id="deeply-nested-choices"),
    ],
)
def test_extract_degrades_to_empty_string(body: str) -> None:
    assert extract_completion_text(body) == ""

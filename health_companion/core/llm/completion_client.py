from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger("health_companion.llm")

PromptTemplate = Callable[[str], str]


class CompletionError(Exception):
    """Base error for completion failures (safe to map to a generic 500)."""


class CompletionNotConfiguredError(CompletionError):
    """Raised before any network I/O when the API key for a call site is missing."""


class CompletionUpstreamError(CompletionError):
    """Raised on transport failure or a non-2xx upstream status.

    `status_code` and `body` are kept for server-side logging only; they must never
    be echoed to the caller. `status_code` is None when no response was received.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class CompletionConfig:
    api_key: str | None
    url: str
    model: str
    max_tokens: int
    timeout_seconds: float


def passthrough_prompt(text: str) -> str:
    return text


def build_completion_payload(*, model: str, prompt: str, max_tokens: int) -> dict[str, Any]:
    return {"model": model, "prompt": prompt, "max_tokens": max_tokens}


def extract_completion_text(body: str) -> str:
    """
    Return `choices[0].text` from a completion response body.

    Literal backslash-n sequences become real line breaks and the result is
    trimmed. Anything unexpected (unparseable JSON, missing or empty `choices`,
    missing or non-string `text`) yields an empty string.
    """

    try:
        data = json.loads(body)
    except Exception as exc:  # noqa: BLE001 - includes RecursionError on deeply nested input
        logger.warning(
            "Completion response is not valid JSON",
            extra={"error": type(exc).__name__},
        )
        return ""

    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    text = first.get("text")
    if not isinstance(text, str) or not text:
        return ""
    return text.replace("\\n", "\n").strip()


class CompletionClient:
    """
    Single-shot client for the text completion endpoint.

    - One POST per call; no retries, no pooling between calls.
    - The status is checked only after the whole body has been read.
    - `transport` lets tests swap the network for an `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        config: CompletionConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    async def complete(self, text: str, *, prompt_template: PromptTemplate = passthrough_prompt) -> str:
        if not self._config.api_key:
            raise CompletionNotConfiguredError("Completion API key is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }
        payload = build_completion_payload(
            model=self._config.model,
            prompt=prompt_template(text),
            max_tokens=self._config.max_tokens,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(self._config.url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise CompletionUpstreamError("Completion request timed out") from exc
        except httpx.HTTPError as exc:
            raise CompletionUpstreamError("Completion request failed") from exc

        body = resp.text
        if not resp.is_success:
            raise CompletionUpstreamError(
                "Completion service returned an error",
                status_code=resp.status_code,
                body=body,
            )

        return extract_completion_text(body)

from __future__ import annotations

from health_companion.core.llm.completion_client import CompletionClient, CompletionConfig
from health_companion.core.settings import Settings, get_settings


def _build_client(*, settings: Settings, api_key: str | None) -> CompletionClient:
    config = CompletionConfig(
        api_key=api_key,
        url=settings.ai_completion_url,
        model=settings.ai_model,
        max_tokens=int(settings.ai_max_tokens),
        timeout_seconds=float(settings.ai_timeout_seconds),
    )
    return CompletionClient(config=config)


def get_diagnosis_client() -> CompletionClient:
    """
    Dependency provider for the diagnosis call site.

    The client is returned even when AI_DIAGNOSIS_KEY is unset; `complete()` then
    fails fast so the route can answer with a configuration error.
    """

    settings = get_settings()
    return _build_client(settings=settings, api_key=settings.ai_diagnosis_key)


def get_ask_client() -> CompletionClient:
    """Dependency provider for the question-answering call site (AI_ASK_KEY)."""

    settings = get_settings()
    return _build_client(settings=settings, api_key=settings.ai_ask_key)

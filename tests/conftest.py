from __future__ import annotations

from collections.abc import Iterator

import pytest

_APP_ENV_VARS = (
    "AI_DIAGNOSIS_KEY",
    "AI_ASK_KEY",
    "REQUIRE_AUTH",
    "AI_COMPLETION_URL",
    "APP_NAME",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _APP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from health_companion.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from health_companion.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c

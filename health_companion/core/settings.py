from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COMPLETION_URL = "https://jiutian.10086.cn/largemodel/api/v2/completions"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Health Companion API",
        validation_alias=AliasChoices("APP_NAME", "app_name"),
        description="Title shown in the OpenAPI schema and docs.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Port used by the `health-companion` entry point.",
    )

    # Session tokens are issued by the auth stubs but only checked when enabled.
    require_auth: bool = Field(
        default=False,
        validation_alias=AliasChoices("REQUIRE_AUTH", "require_auth"),
        description="If true, feature routes require a bearer token issued by /auth/*.",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Origins allowed to call the API from a browser.",
    )

    # AI completion upstream
    # Each feature has its own key so it can be disabled by leaving the key unset.
    ai_diagnosis_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AI_DIAGNOSIS_KEY", "ai_diagnosis_key"),
        description="Bearer token for /ai/diagnosis.",
    )
    ai_ask_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AI_ASK_KEY", "ai_ask_key"),
        description="Bearer token for /ai/ask.",
    )
    ai_completion_url: str = Field(
        default=DEFAULT_COMPLETION_URL,
        validation_alias=AliasChoices("AI_COMPLETION_URL", "ai_completion_url"),
        description="Completion endpoint that receives the prompt.",
    )
    ai_model: str = Field(
        default="jiutian-lan",
        validation_alias=AliasChoices("AI_MODEL", "ai_model"),
        description="Model identifier sent with every completion request.",
    )
    ai_max_tokens: int = Field(
        default=200,
        ge=1,
        validation_alias=AliasChoices("AI_MAX_TOKENS", "ai_max_tokens"),
        description="Token cap sent with every completion request.",
    )
    ai_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("AI_TIMEOUT_SECONDS", "ai_timeout_seconds"),
        description="Transport timeout for completion requests (seconds).",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from health_companion.ai.router import router as ai_router
from health_companion.api.exception_handlers import register_exception_handlers
from health_companion.api.schemas import HealthOut
from health_companion.auth.router import router as auth_router
from health_companion.auth.store import TokenStore
from health_companion.community.router import router as community_router
from health_companion.core.logging import setup_logging
from health_companion.core.metrics import PrometheusMetricsMiddleware, metrics_router
from health_companion.core.middleware.http_logging import HttpLoggingMiddleware
from health_companion.core.settings import get_settings
from health_companion.domain.mock_data import seed_mock_data
from health_companion.health.router import router as health_data_router
from health_companion.medicine.router import router as medicine_router
from health_companion.users.router import router as users_router

setup_logging()

CORS_METHODS = ["GET", "POST", "DELETE", "PUT", "PATCH", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Stores live exactly as long as the process; nothing survives a restart.
        app.state.token_store = TokenStore()
        app.state.mock_data = seed_mock_data()
        yield
        app.state.token_store.clear()

    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Mock backend for the health companion mobile app.\n\n"
            "- Auth, profile, health data, reminders and community endpoints serve in-memory "
            "demo data.\n"
            "- `/ai/diagnosis` and `/ai/ask` forward the text to a completion service and "
            "return the first generated answer.\n"
            "- Every JSON response carries `code` (`0` on success)."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        openapi_tags=[
            {"name": "health", "description": "Liveness checks for load balancers and monitoring."},
            {"name": "auth", "description": "Login stubs that issue opaque session tokens."},
            {"name": "users", "description": "Current user profile."},
            {"name": "health-data", "description": "Dashboard vitals and health record index."},
            {"name": "medicine", "description": "Medicine reminders."},
            {"name": "community", "description": "News and discussion feed."},
            {"name": "ai", "description": "AI diagnosis, question answering and speech."},
            {"name": "monitoring", "description": "Prometheus-compatible metrics endpoint."},
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, tags=["health"], summary="Root banner")
    async def root() -> str:
        return "Backend server is running."

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "The completion service is not contacted."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(health_data_router)
    app.include_router(medicine_router)
    app.include_router(community_router)
    app.include_router(ai_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on $PORT (default 3000)."""
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port, log_config=None)

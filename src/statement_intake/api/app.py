"""FastAPI application factory."""
from __future__ import annotations
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ..config import Settings
from ..pipeline import IntakePipeline
from ..utils.logging import setup_logging
from .middleware import RequestLoggingMiddleware
from .routes import formatting, health, upload


def create_app(settings: Settings | None = None, pipeline: IntakePipeline | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    setup_logging(settings.log_level, json_logs=settings.json_logs)

    app = FastAPI(
        title="Statement Intake API",
        description="Bank statement upload, extraction and locale formatting API",
        version="0.1.0",
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.pipeline = pipeline or IntakePipeline(settings)

    app.include_router(health.router, tags=["health"])
    app.include_router(upload.router, prefix="/upload", tags=["upload"])
    app.include_router(formatting.router, prefix="/formatting", tags=["formatting"])

    return app

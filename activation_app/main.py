from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from activation_app.config import load_env_files

    load_env_files()

    errors: list[str] = []

    if not os.getenv("ACTIVATION_API_TOKEN", "").strip():
        errors.append(
            "ACTIVATION_API_TOKEN is not set. Empty strings are not permitted."
        )

    base_url = os.getenv("ACTIVATION_API_BASE_URL", "").strip()
    if base_url and not base_url.lower().startswith(("http://", "https://")):
        errors.append(
            f"ACTIVATION_API_BASE_URL='{base_url}' is not valid. It must be an http(s) URL."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Log the activation endpoint on boot; close its HTTP session on exit."""
    from activation_app.config import get_activation_api_settings
    from activation_app.services.activation_batch_service import get_activation_batch_service

    settings = get_activation_api_settings()
    logging.getLogger(__name__).info(
        "Activation endpoint configured base_url=%s max_concurrency=%s",
        settings.base_url,
        settings.max_concurrency or "unbounded",
    )
    try:
        yield
    finally:
        get_activation_batch_service().close()
        logging.getLogger(__name__).info("Activation HTTP session closed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Membership Activation API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from activation_app.api.routers import membership_upload_router

    application.include_router(membership_upload_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()

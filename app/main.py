from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_log_level


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_log_level()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="Sales Audit API",
        version="1.0.0",
    )

    from app.api.routers import audit_router

    application.include_router(audit_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from payroll_api.api.health import router as health_router
from payroll_api.api.router import api_router
from payroll_api.config import configure_logging, get_settings
from payroll_api.db import dispose_engine
from payroll_api.exceptions import setup_exception_handlers
from payroll_api.middleware import setup_middleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    try:
        yield
    finally:
        logger.info("Shutting down %s", settings.app_name)
        await dispose_engine()


def create_app() -> FastAPI:
    """Build the payroll API: health and roles, then the workflow, budget and dashboard routers."""
    settings = get_settings()
    interactive_docs = settings.environment != "production"

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Payroll runs, payslips and budget tracking for the public service.",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if interactive_docs else None,
        redoc_url="/redoc" if interactive_docs else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()

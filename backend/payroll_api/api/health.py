import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from payroll_api.config import get_settings
from payroll_api.db import SessionDep
from payroll_api.models.enums import PayrollRole

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok", "degraded", "error"]
    version: str
    environment: str


class RolesResponse(BaseModel):
    """Roles accepted in the X-Role header."""

    roles: list[str]


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Return the health status of the API service."""
    settings = get_settings()
    status: Literal["ok", "degraded", "error"] = "ok"

    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check: database connectivity failed")
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/roles", response_model=RolesResponse)
async def list_roles() -> RolesResponse:
    """List the government and ministry roles known to the payroll API."""
    return RolesResponse(roles=[role.value for role in PayrollRole])

# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from payroll_api.api.deps import AuthDep, EmployeeServiceDep, InboxServiceDep, MinistryServiceDep
from payroll_api.db import SessionDep
from payroll_api.schemas.dashboard import DashboardResponse
from payroll_api.services.dashboard import get_dashboard_snapshot

dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get(
    "",
    response_model=DashboardResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": DashboardResponse}},
)
async def get_dashboard(
    session: SessionDep,
    auth: AuthDep,
    employee_service: EmployeeServiceDep,
    ministry_service: MinistryServiceDep,
    inbox_service: InboxServiceDep,
) -> DashboardResponse | JSONResponse:
    """Dashboard snapshot for the current month. A degraded snapshot is served with a 500."""
    snapshot = await get_dashboard_snapshot(session, employee_service, ministry_service, inbox_service)
    if snapshot.error is not None:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=snapshot.model_dump(mode="json"),
        )
    return snapshot

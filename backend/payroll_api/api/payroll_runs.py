# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from payroll_api.api.deps import AdminDep, AuthDep, EmployeeServiceDep
from payroll_api.db import SessionDep
from payroll_api.schemas.payroll_run import (
    AdvanceStepPayload,
    AdvanceStepResponse,
    CreatePayrollRunPayload,
    PayrollRunDetailResponse,
    PayrollRunListResponse,
    PayrollRunResponse,
)
from payroll_api.schemas.payslip import GeneratePayslipsResponse
from payroll_api.services import payroll_run as payroll_run_service
from payroll_api.services import payslip as payslip_service

payroll_runs_router = APIRouter(prefix="/payroll-runs", tags=["payroll-runs"])


@payroll_runs_router.get("", response_model=PayrollRunListResponse)
async def list_payroll_runs(
    session: SessionDep,
    auth: AuthDep,
    period_month: int | None = Query(default=None),
    period_year: int | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> PayrollRunListResponse:
    """List payroll runs with optional period and status filters."""
    return await payroll_run_service.list_runs(session, period_month, period_year, status_filter, offset, limit)


@payroll_runs_router.get("/{run_id}", response_model=PayrollRunDetailResponse)
async def get_payroll_run(
    run_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> PayrollRunDetailResponse:
    """Get a payroll run with its completed steps."""
    return await payroll_run_service.get_run(session, run_id)


@payroll_runs_router.post("", response_model=PayrollRunResponse, status_code=status.HTTP_201_CREATED)
async def create_payroll_run(
    payload: CreatePayrollRunPayload,
    session: SessionDep,
    auth: AdminDep,
) -> PayrollRunResponse:
    """Open a draft payroll run for a period (admin only)."""
    return await payroll_run_service.create_run(session, auth, payload)


@payroll_runs_router.put("/{run_id}/step", response_model=AdvanceStepResponse)
async def advance_payroll_run_step(
    run_id: uuid.UUID,
    payload: AdvanceStepPayload,
    session: SessionDep,
    auth: AuthDep,
) -> AdvanceStepResponse:
    """Complete a workflow step of a payroll run."""
    return await payroll_run_service.advance_step(session, auth, run_id, payload)


@payroll_runs_router.post("/{run_id}/generate-payslips", response_model=GeneratePayslipsResponse)
async def generate_payslips(
    run_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
    employee_service: EmployeeServiceDep,
) -> GeneratePayslipsResponse:
    """Generate payslips for every active employee not yet covered by the run (admin only)."""
    return await payslip_service.generate_payslips(session, auth, run_id, employee_service)

# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from payroll_api.api.deps import AdminDep, AuthDep
from payroll_api.db import SessionDep
from payroll_api.schemas.payslip import PayslipListResponse, PayslipResponse
from payroll_api.services import payslip as payslip_service

payslips_router = APIRouter(prefix="/payslips", tags=["payslips"])


@payslips_router.get("", response_model=PayslipListResponse)
async def list_payslips(
    session: SessionDep,
    auth: AuthDep,
    payroll_run_id: uuid.UUID | None = Query(default=None),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
) -> PayslipListResponse:
    """List payslips of a payroll run and/or an employee."""
    return await payslip_service.list_payslips(session, payroll_run_id, employee_id, offset, limit)


@payslips_router.get("/{payslip_id}", response_model=PayslipResponse)
async def get_payslip(
    payslip_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> PayslipResponse:
    """Get a single payslip."""
    return await payslip_service.get_payslip(session, payslip_id)


@payslips_router.put("/{payslip_id}/paid", response_model=PayslipResponse)
async def mark_payslip_paid(
    payslip_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
) -> PayslipResponse:
    """Mark a payslip as paid (admin only)."""
    return await payslip_service.mark_paid(session, auth, payslip_id)

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class PayslipResponse(BaseModel):
    """Response schema for a single payslip."""

    id: uuid.UUID
    employee_id: uuid.UUID
    payroll_run_id: uuid.UUID
    gross: Decimal
    deductions: Decimal
    net: Decimal
    paid_at: datetime | None
    created_at: datetime


class PayslipListResponse(BaseModel):
    """List of payslips."""

    items: list[PayslipResponse]
    total: int


class GeneratePayslipsResponse(BaseModel):
    """Outcome of payslip generation for a run."""

    message: str = "Payslips generated"
    count: int
    created: int
    payslips: list[PayslipResponse]

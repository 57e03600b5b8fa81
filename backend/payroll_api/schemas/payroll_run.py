# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from payroll_api.models.enums import PayrollRunStatus

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class CreatePayrollRunPayload(BaseModel):
    """Request body for opening a payroll run for a period.

    Period bounds are checked by the service so that an invalid period is
    reported as a 400 rather than a validation error.
    """

    period_month: int
    period_year: int
    budget_total: Decimal | None = Field(default=None, ge=0, max_digits=18, decimal_places=2)


class AdvanceStepPayload(BaseModel):
    """Request body for completing a workflow step.

    ``step_name`` is not constrained here: any unknown or missing name is
    reported by the service as a 400.
    """

    step_name: str | None = None
    payload: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PayrollRunResponse(BaseModel):
    """Response schema for a single payroll run."""

    id: uuid.UUID
    period_month: int
    period_year: int
    status: PayrollRunStatus
    budget_total: Decimal | None
    created_at: datetime
    updated_at: datetime


class PayrollRunStepResponse(BaseModel):
    """A completed step of a payroll run."""

    id: uuid.UUID
    payroll_run_id: uuid.UUID
    step_order: int
    step_name: str
    completed_at: datetime | None
    completed_by: uuid.UUID | None
    payload: dict[str, Any] | None
    created_at: datetime


class PayrollRunDetailResponse(BaseModel):
    """A payroll run together with its completed steps in canonical order."""

    payroll_run: PayrollRunResponse
    steps: list[PayrollRunStepResponse]


class AdvanceStepResponse(BaseModel):
    """Result of completing a step."""

    payroll_run: PayrollRunResponse
    step_completed: str


class PayrollRunListResponse(BaseModel):
    """Paginated list of payroll runs."""

    items: list[PayrollRunResponse]
    total: int
    limit: int
    offset: int

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CreateBudgetPayload(BaseModel):
    """Request body for allocating a monthly budget."""

    ministry_id: uuid.UUID
    department_id: uuid.UUID | None = None
    period_month: int
    period_year: int
    amount: Decimal = Field(max_digits=18, decimal_places=2)


class UpdateBudgetPayload(BaseModel):
    """Request body for correcting an allocation. Only the fields sent are changed.

    Sending ``department_id: null`` moves the allocation back to ministry level.
    """

    amount: Decimal | None = Field(default=None, max_digits=18, decimal_places=2)
    department_id: uuid.UUID | None = None


class BudgetResponse(BaseModel):
    """Response schema for a single budget allocation."""

    id: uuid.UUID
    ministry_id: uuid.UUID
    department_id: uuid.UUID | None
    period_month: int
    period_year: int
    amount: Decimal
    allocated_at: datetime
    created_at: datetime


class BudgetListResponse(BaseModel):
    """List of budget allocations."""

    items: list[BudgetResponse]
    total: int


class SpendSummary(BaseModel):
    """Allocated budget against spend for one period."""

    period_month: int
    period_year: int
    total_budget: Decimal
    total_spent: Decimal


class UpcomingPayment(BaseModel):
    """Per-ministry payment outlook for the period."""

    ministry_id: uuid.UUID
    ministry_name: str
    payment_day: int
    payment_date: str
    employee_count: int
    amount: Decimal

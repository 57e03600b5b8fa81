# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from payroll_api.api.deps import AdminDep, AuthDep, MinistryServiceDep
from payroll_api.db import SessionDep
from payroll_api.schemas.budget import (
    BudgetListResponse,
    BudgetResponse,
    CreateBudgetPayload,
    SpendSummary,
    UpdateBudgetPayload,
)
from payroll_api.services import budget as budget_service

budgets_router = APIRouter(prefix="/budgets", tags=["budgets"])


@budgets_router.get("", response_model=BudgetListResponse)
async def list_budgets(
    session: SessionDep,
    auth: AuthDep,
    ministry_id: uuid.UUID | None = Query(default=None),
    department_id: uuid.UUID | None = Query(default=None),
    period_month: int | None = Query(default=None),
    period_year: int | None = Query(default=None),
) -> BudgetListResponse:
    """List budget allocations with optional filters."""
    return await budget_service.list_budgets(session, ministry_id, department_id, period_month, period_year)


@budgets_router.get("/summary", response_model=SpendSummary)
async def get_spend_summary(
    session: SessionDep,
    auth: AuthDep,
    period_month: int = Query(ge=1, le=12),
    period_year: int = Query(ge=2000),
) -> SpendSummary:
    """Total budget against total spend for a period."""
    return await budget_service.compute_period_totals(session, period_month, period_year)


@budgets_router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    payload: CreateBudgetPayload,
    session: SessionDep,
    auth: AdminDep,
    ministry_service: MinistryServiceDep,
) -> BudgetResponse:
    """Allocate a monthly budget to a ministry (admin only)."""
    return await budget_service.create_budget(session, auth, payload, ministry_service)


@budgets_router.get("/{budget_id}", response_model=BudgetResponse)
async def get_budget(
    budget_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> BudgetResponse:
    """Get a single budget allocation."""
    return await budget_service.get_budget(session, budget_id)


@budgets_router.put("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: uuid.UUID,
    payload: UpdateBudgetPayload,
    session: SessionDep,
    auth: AdminDep,
) -> BudgetResponse:
    """Correct the amount or department of an allocation (admin only)."""
    return await budget_service.update_budget(session, auth, budget_id, payload)


@budgets_router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
) -> None:
    """Delete a budget allocation (admin only)."""
    await budget_service.delete_budget(session, auth, budget_id)

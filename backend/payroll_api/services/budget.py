"""Budget allocations and the budget-versus-spend aggregation behind the dashboard."""

# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import or_, select
from sqlmodel import col

from payroll_api.exceptions import InvalidInputError, NotFoundError
from payroll_api.models.budget import Budget
from payroll_api.models.enums import AuditAction, AuditEntityType, EmployeeStatus, PayrollRunStatus
from payroll_api.models.payroll_run import PayrollRun
from payroll_api.models.payslip import Payslip
from payroll_api.schemas.budget import BudgetListResponse, BudgetResponse, SpendSummary, UpcomingPayment
from payroll_api.services.audit import model_to_audit_dict, write_audit_log
from payroll_api.services.payroll_run import validate_period

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from payroll_api.schemas.auth import AuthContext
    from payroll_api.schemas.budget import CreateBudgetPayload, UpdateBudgetPayload
    from payroll_api.services.employee import EmployeeService
    from payroll_api.services.ministry import MinistryService

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

# A payslip counts as spent when it is paid, or when its run has gone through payment.
SPENT_RUN_STATUSES = (PayrollRunStatus.PAYMENT_DONE.value, PayrollRunStatus.RECONCILED.value)


def month_name(month: int) -> str:
    """French name of a calendar month, or an empty string when out of range."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def _decimal_sum(values: Iterable[Decimal | None]) -> Decimal:
    total = Decimal(0)
    for value in values:
        if value is not None:
            total += Decimal(value)
    return total


def _build_budget_response(budget: Budget) -> BudgetResponse:
    return BudgetResponse(
        id=budget.id,
        ministry_id=budget.ministry_id,
        department_id=budget.department_id,
        period_month=budget.period_month,
        period_year=budget.period_year,
        amount=budget.amount,
        allocated_at=budget.allocated_at,
        created_at=budget.created_at,
    )


# ---------------------------------------------------------------------------
# Budget records
# ---------------------------------------------------------------------------


async def create_budget(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateBudgetPayload,
    ministry_service: MinistryService,
) -> BudgetResponse:
    """Allocate a monthly budget to a ministry (optionally one of its departments)."""
    auth.require_admin()
    validate_period(payload.period_month, payload.period_year)
    if payload.amount < 0:
        raise InvalidInputError("amount must be a non-negative number")

    ministry = await ministry_service.get_ministry(payload.ministry_id)
    if ministry is None:
        raise NotFoundError("Ministry not found")

    budget = Budget(
        ministry_id=payload.ministry_id,
        department_id=payload.department_id,
        period_month=payload.period_month,
        period_year=payload.period_year,
        amount=payload.amount,
    )
    session.add(budget)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.BUDGET,
        entity_id=budget.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(budget),
    )

    await session.commit()
    await session.refresh(budget)
    logger.info(
        "Budget %s allocated to ministry %s for %02d/%d",
        budget.amount,
        budget.ministry_id,
        budget.period_month,
        budget.period_year,
    )
    return _build_budget_response(budget)


async def list_budgets(
    session: AsyncSession,
    ministry_id: uuid.UUID | None = None,
    department_id: uuid.UUID | None = None,
    period_month: int | None = None,
    period_year: int | None = None,
) -> BudgetListResponse:
    """List budgets with optional filters, most recent period first."""
    filters = []
    if ministry_id is not None:
        filters.append(col(Budget.ministry_id) == ministry_id)
    if department_id is not None:
        filters.append(col(Budget.department_id) == department_id)
    if period_month is not None:
        filters.append(col(Budget.period_month) == period_month)
    if period_year is not None:
        filters.append(col(Budget.period_year) == period_year)

    result = await session.execute(
        select(Budget)
        .where(*filters)
        .order_by(
            col(Budget.period_year).desc(),
            col(Budget.period_month).desc(),
            col(Budget.created_at),
        )
    )
    budgets = list(result.scalars().all())
    return BudgetListResponse(items=[_build_budget_response(b) for b in budgets], total=len(budgets))


async def _get_budget_or_404(session: AsyncSession, budget_id: uuid.UUID) -> Budget:
    budget = await session.get(Budget, budget_id)
    if budget is None:
        raise NotFoundError("Budget not found")
    return budget


async def get_budget(session: AsyncSession, budget_id: uuid.UUID) -> BudgetResponse:
    """Get a single budget allocation."""
    return _build_budget_response(await _get_budget_or_404(session, budget_id))


async def update_budget(
    session: AsyncSession,
    auth: AuthContext,
    budget_id: uuid.UUID,
    payload: UpdateBudgetPayload,
) -> BudgetResponse:
    """Correct the amount and/or department of an allocation.

    The period and ministry are fixed: a wrong one is fixed by deleting the
    allocation and creating a new one.
    """
    auth.require_admin()

    changes: dict[str, Any] = {}
    if payload.amount is not None:
        if payload.amount < 0:
            raise InvalidInputError("amount must be a non-negative number")
        changes["amount"] = payload.amount
    if "department_id" in payload.model_fields_set:
        changes["department_id"] = payload.department_id
    if not changes:
        raise InvalidInputError("No fields to update")

    budget = await _get_budget_or_404(session, budget_id)
    before_dict = model_to_audit_dict(budget)
    for field, value in changes.items():
        setattr(budget, field, value)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.BUDGET,
        entity_id=budget.id,
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(budget),
    )

    await session.commit()
    await session.refresh(budget)
    logger.info("Budget %s updated: %s", budget.id, ", ".join(sorted(changes)))
    return _build_budget_response(budget)


async def delete_budget(
    session: AsyncSession,
    auth: AuthContext,
    budget_id: uuid.UUID,
) -> None:
    """Remove an allocation; it no longer counts towards the period totals."""
    auth.require_admin()
    budget = await _get_budget_or_404(session, budget_id)

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.BUDGET,
        entity_id=budget.id,
        action=AuditAction.DELETE,
        before_json=model_to_audit_dict(budget),
    )

    await session.delete(budget)
    await session.commit()
    logger.info("Budget %s deleted", budget_id)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


async def compute_period_totals(session: AsyncSession, period_month: int, period_year: int) -> SpendSummary:
    """Total allocated budget and total spend for a period, across all ministries.

    Amounts are summed in Python with a Decimal accumulator so that no
    database or driver float conversion leaks into the totals.
    """
    budget_result = await session.execute(
        select(Budget.amount).where(
            col(Budget.period_month) == period_month,
            col(Budget.period_year) == period_year,
        )
    )
    total_budget = _decimal_sum(budget_result.scalars().all())

    spent_result = await session.execute(
        select(Payslip.net)
        .join(PayrollRun, col(PayrollRun.id) == col(Payslip.payroll_run_id))
        .where(
            col(PayrollRun.period_month) == period_month,
            col(PayrollRun.period_year) == period_year,
            or_(
                col(Payslip.paid_at).is_not(None),
                col(PayrollRun.status).in_(SPENT_RUN_STATUSES),
            ),
        )
    )
    total_spent = _decimal_sum(spent_result.scalars().all())

    return SpendSummary(
        period_month=period_month,
        period_year=period_year,
        total_budget=total_budget,
        total_spent=total_spent,
    )


async def list_upcoming_payments(
    session: AsyncSession,
    period_month: int,
    period_year: int,
    employee_service: EmployeeService,
    ministry_service: MinistryService,
) -> list[UpcomingPayment]:
    """Per-ministry payment outlook for a period, earliest payment day first.

    The amount is the first budget row allocated to the ministry for the
    period (zero when there is none), not the sum of its department splits.
    """
    ministries = await ministry_service.list_ministries()
    upcoming: list[UpcomingPayment] = []

    for ministry in ministries:
        employee_count = await employee_service.count_employees(
            status=EmployeeStatus.ACTIVE, ministry_id=ministry.id
        )
        result = await session.execute(
            select(Budget.amount)
            .where(
                col(Budget.ministry_id) == ministry.id,
                col(Budget.period_month) == period_month,
                col(Budget.period_year) == period_year,
            )
            .order_by(col(Budget.created_at))
            .limit(1)
        )
        amount = result.scalar_one_or_none()
        upcoming.append(
            UpcomingPayment(
                ministry_id=ministry.id,
                ministry_name=ministry.name,
                payment_day=ministry.payment_day_of_month,
                payment_date=f"{ministry.payment_day_of_month} {month_name(period_month)}",
                employee_count=employee_count,
                amount=Decimal(amount) if amount is not None else Decimal(0),
            )
        )

    upcoming.sort(key=lambda p: p.payment_day)
    return upcoming

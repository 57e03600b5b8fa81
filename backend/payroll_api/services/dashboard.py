from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from payroll_api.models.base import now_utc
from payroll_api.models.enums import EmployeeStatus
from payroll_api.models.payroll_run import PayrollRun
from payroll_api.schemas.dashboard import DashboardResponse, RecentActivity, SystemStatus
from payroll_api.services.budget import compute_period_totals, list_upcoming_payments, month_name
from payroll_api.services.payroll_run import ACTIVE_RUN_STATUSES

if TYPE_CHECKING:
    from datetime import date

    from sqlalchemy.ext.asyncio import AsyncSession

    from payroll_api.services.employee import EmployeeService
    from payroll_api.services.inbox import InboxService
    from payroll_api.services.ministry import MinistryService

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5
DASHBOARD_ERROR = "Failed to load dashboard"


async def _build_snapshot(
    session: AsyncSession,
    today: date,
    employee_service: EmployeeService,
    ministry_service: MinistryService,
    inbox_service: InboxService,
) -> DashboardResponse:
    total_employees = await employee_service.count_employees(status=EmployeeStatus.ACTIVE)
    totals = await compute_period_totals(session, today.month, today.year)

    active_result = await session.execute(
        select(func.count()).select_from(PayrollRun).where(col(PayrollRun.status).in_(ACTIVE_RUN_STATUSES))
    )
    active_payrolls = active_result.scalar_one()

    pending_verifications = await inbox_service.count_pending_verifications()
    unread_messages = await inbox_service.count_unread_messages()

    upcoming = await list_upcoming_payments(
        session, today.month, today.year, employee_service, ministry_service
    )

    recent_result = await session.execute(
        select(PayrollRun).order_by(col(PayrollRun.updated_at).desc()).limit(RECENT_ACTIVITY_LIMIT)
    )
    recent_activities = [
        RecentActivity(
            label=f"Paie {month_name(run.period_month)} {run.period_year}",
            status=run.status,
            at=run.updated_at,
        )
        for run in recent_result.scalars().all()
    ]

    return DashboardResponse(
        total_employees=total_employees,
        total_budget=totals.total_budget,
        total_budget_spent=totals.total_spent,
        active_payrolls=active_payrolls,
        pending_verifications=pending_verifications,
        unread_messages=unread_messages,
        upcoming_payments=upcoming,
        recent_activities=recent_activities,
        system_status=SystemStatus(
            workflow_active=active_payrolls > 0,
            verifications_pending=pending_verifications,
            messages_unread=unread_messages,
        ),
    )


async def get_dashboard_snapshot(
    session: AsyncSession,
    employee_service: EmployeeService,
    ministry_service: MinistryService,
    inbox_service: InboxService,
    today: date | None = None,
) -> DashboardResponse:
    """Summarise the payroll system for the current calendar month (UTC, like every stored timestamp).

    Best-effort: if any underlying query fails the error is logged and a
    zero-valued snapshot carrying ``error`` is returned instead of raising.
    """
    if today is None:
        today = now_utc().date()
    try:
        return await _build_snapshot(session, today, employee_service, ministry_service, inbox_service)
    except Exception:
        logger.exception("Dashboard snapshot failed for %02d/%d", today.month, today.year)
        return DashboardResponse(error=DASHBOARD_ERROR)

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from payroll_api.schemas.budget import UpcomingPayment


class RecentActivity(BaseModel):
    """A recently touched payroll run."""

    type: str = "payroll_run"
    label: str
    status: str
    at: datetime


class SystemStatus(BaseModel):
    workflow_active: bool = False
    verifications_pending: int = 0
    messages_unread: int = 0


class DashboardResponse(BaseModel):
    """Point-in-time summary of the payroll system."""

    total_employees: int = 0
    total_budget: Decimal = Decimal(0)
    total_budget_spent: Decimal = Decimal(0)
    active_payrolls: int = 0
    pending_verifications: int = 0
    unread_messages: int = 0
    upcoming_payments: list[UpcomingPayment] = Field(default_factory=list)
    recent_activities: list[RecentActivity] = Field(default_factory=list)
    system_status: SystemStatus = Field(default_factory=SystemStatus)
    error: str | None = None

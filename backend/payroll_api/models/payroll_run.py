# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from payroll_api.models.base import Money, TimestampMixin, UUIDBase, now_utc
from payroll_api.models.enums import PayrollRunStatus


class PayrollRun(UUIDBase, TimestampMixin, table=True):
    """One pay period's approval and payment cycle."""

    __tablename__ = "payroll_run"
    __table_args__ = (
        sa.UniqueConstraint("period_month", "period_year", name="uq_payroll_run_period"),
        sa.CheckConstraint("period_month BETWEEN 1 AND 12", name="ck_payroll_run_month"),
    )

    period_month: int
    period_year: int
    status: str = Field(
        default=PayrollRunStatus.DRAFT, max_length=50, index=True, sa_column_kwargs={"server_default": "draft"}
    )
    budget_total: Decimal | None = Field(default=None, sa_type=Money)
    updated_at: datetime = Field(
        default_factory=now_utc,
        index=True,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )


class PayrollRunStep(UUIDBase, TimestampMixin, table=True):
    """A completed milestone of a payroll run. Each step is recorded at most once per run."""

    __tablename__ = "payroll_run_step"
    __table_args__ = (sa.UniqueConstraint("payroll_run_id", "step_name", name="uq_payroll_run_step"),)

    payroll_run_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid, sa.ForeignKey("payroll_run.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    step_order: int
    step_name: str = Field(max_length=100)
    completed_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    completed_by: uuid.UUID | None = None
    payload: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)

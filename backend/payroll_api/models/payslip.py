# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from payroll_api.models.base import Money, TimestampMixin, UUIDBase


class Payslip(UUIDBase, TimestampMixin, table=True):
    """Computed pay for one employee in one payroll run."""

    __tablename__ = "payslip"
    __table_args__ = (sa.UniqueConstraint("employee_id", "payroll_run_id", name="uq_payslip_employee_run"),)

    employee_id: uuid.UUID = Field(index=True)
    payroll_run_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid, sa.ForeignKey("payroll_run.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    gross: Decimal = Field(sa_type=Money)
    deductions: Decimal = Field(default=Decimal(0), sa_type=Money, sa_column_kwargs={"server_default": "0"})
    net: Decimal = Field(sa_type=Money)
    paid_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]

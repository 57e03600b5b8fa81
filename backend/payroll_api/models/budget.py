# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from payroll_api.models.base import Money, TimestampMixin, UUIDBase, now_utc


class Budget(UUIDBase, TimestampMixin, table=True):
    """Monthly spending ceiling allocated to a ministry or one of its departments."""

    __tablename__ = "budget"
    __table_args__ = (
        sa.Index("ix_budget_period", "period_year", "period_month"),
        sa.CheckConstraint("amount >= 0", name="ck_budget_amount_non_negative"),
    )

    ministry_id: uuid.UUID = Field(index=True)
    department_id: uuid.UUID | None = None
    period_month: int
    period_year: int
    amount: Decimal = Field(sa_type=Money)
    allocated_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )

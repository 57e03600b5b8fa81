# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from payroll_api.models.enums import EmployeeStatus


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee in the stub service."""

    ministry_id: uuid.UUID
    department_id: uuid.UUID | None = None
    employee_number: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    surname: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    salary: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    status: EmployeeStatus = EmployeeStatus.ACTIVE


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    ministry_id: uuid.UUID
    department_id: uuid.UUID | None
    employee_number: str
    name: str
    surname: str
    position: str
    salary: Decimal
    status: EmployeeStatus


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from payroll_api.models.enums import EmployeeStatus


class EmployeeInfo(BaseModel):
    """Employee record from the state employee registry."""

    id: uuid.UUID
    ministry_id: uuid.UUID
    department_id: uuid.UUID | None = None
    employee_number: str
    name: str
    surname: str
    position: str
    salary: Decimal
    status: EmployeeStatus = EmployeeStatus.ACTIVE


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the employee registry."""

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        ...

    async def list_employees(
        self,
        status: EmployeeStatus | None = None,
        ministry_id: uuid.UUID | None = None,
    ) -> list[EmployeeInfo]:
        """List employees, optionally filtered by status and ministry."""
        ...

    async def count_employees(
        self,
        status: EmployeeStatus | None = None,
        ministry_id: uuid.UUID | None = None,
    ) -> int:
        """Count employees, optionally filtered by status and ministry."""
        ...


class InMemoryEmployeeService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Seed an employee for testing."""
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        return self._employees.get(employee_id)

    async def list_employees(
        self,
        status: EmployeeStatus | None = None,
        ministry_id: uuid.UUID | None = None,
    ) -> list[EmployeeInfo]:
        """List employees, optionally filtered by status and ministry."""
        return [
            e
            for e in self._employees.values()
            if (status is None or e.status == status) and (ministry_id is None or e.ministry_id == ministry_id)
        ]

    async def count_employees(
        self,
        status: EmployeeStatus | None = None,
        ministry_id: uuid.UUID | None = None,
    ) -> int:
        """Count employees, optionally filtered by status and ministry."""
        return len(await self.list_employees(status, ministry_id))


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """FastAPI dependency for the employee registry."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the service (for testing or production wiring)."""
    global _employee_service
    _employee_service = service

# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from payroll_api.api.deps import AdminDep, AuthDep, EmployeeServiceDep
from payroll_api.exceptions import NotFoundError
from payroll_api.models.enums import EmployeeStatus
from payroll_api.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from payroll_api.services.employee import EmployeeInfo

employees_router = APIRouter(prefix="/employees", tags=["employees"])


def _to_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        ministry_id=employee.ministry_id,
        department_id=employee.department_id,
        employee_number=employee.employee_number,
        name=employee.name,
        surname=employee.surname,
        position=employee.position,
        salary=employee.salary,
        status=employee.status,
    )


@employees_router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AdminDep,
    svc: EmployeeServiceDep,
) -> EmployeeResponse:
    """Create or update an employee in the stub registry (admin only)."""
    employee = EmployeeInfo(id=employee_id, **payload.model_dump())
    svc.seed(employee)  # ty: ignore[unresolved-attribute]
    return _to_response(employee)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(
    employee_id: uuid.UUID,
    auth: AuthDep,
    svc: EmployeeServiceDep,
) -> EmployeeResponse:
    """Get an employee from the stub registry."""
    employee = await svc.get_employee(employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return _to_response(employee)


@employees_router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees(
    auth: AuthDep,
    svc: EmployeeServiceDep,
    status: EmployeeStatus | None = Query(default=None),
    ministry_id: uuid.UUID | None = Query(default=None),
) -> EmployeeListResponse:
    """List employees from the stub registry."""
    employees = await svc.list_employees(status=status, ministry_id=ministry_id)
    items = [_to_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))

# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header

from payroll_api.models.enums import PayrollRole
from payroll_api.schemas.auth import AuthContext
from payroll_api.services.employee import EmployeeService, get_employee_service
from payroll_api.services.inbox import InboxService, get_inbox_service
from payroll_api.services.ministry import MinistryService, get_ministry_service


async def get_auth_context(
    x_user_id: uuid.UUID = Header(),
    x_role: str = Header(default=PayrollRole.AGENT.value),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Require admin role for the request."""
    auth.require_admin()
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]

EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
MinistryServiceDep = Annotated[MinistryService, Depends(get_ministry_service)]
InboxServiceDep = Annotated[InboxService, Depends(get_inbox_service)]

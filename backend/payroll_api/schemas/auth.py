# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from payroll_api.exceptions import ForbiddenError
from payroll_api.models.enums import PayrollRole


class AuthContext(BaseModel):
    """Dev auth context extracted from request headers."""

    user_id: uuid.UUID
    role: str = PayrollRole.AGENT.value

    @property
    def is_admin(self) -> bool:
        return self.role == PayrollRole.ADMIN

    def require_admin(self) -> None:
        """Raise 403 unless the caller holds the Admin role."""
        if not self.is_admin:
            raise ForbiddenError("Admin access required")

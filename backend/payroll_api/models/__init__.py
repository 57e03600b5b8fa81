from sqlmodel import SQLModel

from payroll_api.models.audit import AuditLog
from payroll_api.models.base import TimestampMixin, UUIDBase
from payroll_api.models.budget import Budget
from payroll_api.models.enums import (
    AuditAction,
    AuditEntityType,
    EmployeeStatus,
    PayrollRole,
    PayrollRunStatus,
    PayrollStepName,
)
from payroll_api.models.payroll_run import PayrollRun, PayrollRunStep
from payroll_api.models.payslip import Payslip

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "Budget",
    "EmployeeStatus",
    "PayrollRole",
    "PayrollRun",
    "PayrollRunStatus",
    "PayrollRunStep",
    "PayrollStepName",
    "Payslip",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]

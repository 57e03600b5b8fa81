from __future__ import annotations

import enum


class PayrollRunStatus(enum.StrEnum):
    """Lifecycle status of a payroll run."""

    DRAFT = "draft"
    REPORT_UPLOADED = "report_uploaded"
    AUDIT_PENDING = "audit_pending"
    AUDIT_APPROVED = "audit_approved"
    AUTH_PENDING = "auth_pending"
    AUTH_APPROVED = "auth_approved"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_DONE = "payment_done"
    RECONCILED = "reconciled"


class PayrollStepName(enum.StrEnum):
    """The five canonical milestones of a payroll run."""

    REPORT_UPLOADED = "report_uploaded"
    AUDIT_APPROVED = "audit_approved"
    AUTH_APPROVED = "auth_approved"
    PAYMENT_DONE = "payment_done"
    RECONCILED = "reconciled"


class EmployeeStatus(enum.StrEnum):
    """Employment status held by the employee record store."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DECEASED = "deceased"
    RETIRED = "retired"


class PayrollRole(enum.StrEnum):
    """Government hierarchy and ministry roles recognised by the API."""

    ADMIN = "Admin"
    PRESIDENT = "President"
    PREMIER_MINISTRE = "Premier_Ministre"
    VPM = "VPM"
    MINISTRE_ETAT = "Ministre_Etat"
    MINISTRE = "Ministre"
    MINISTRE_DELEGUE = "Ministre_Delegue"
    VICE_MINISTRE = "Vice_Ministre"
    DIRECTEUR_CABINET = "Directeur_Cabinet"
    SECRETAIRE_GENERAL = "Secretaire_General"
    DIRECTEUR_PAIE = "Directeur_Paie"
    DIRECTEUR_BUDGET = "Directeur_Budget"
    DIRECTEUR_INFORMATIQUE = "Directeur_Informatique"
    CHEF_DIVISION = "Chef_Division"
    CHEF_BUREAU = "Chef_Bureau"
    AGENT = "Agent"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    PAYROLL_RUN = "PAYROLL_RUN"
    PAYROLL_RUN_STEP = "PAYROLL_RUN_STEP"
    PAYSLIP = "PAYSLIP"
    BUDGET = "BUDGET"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    ADVANCE = "ADVANCE"
    GENERATE = "GENERATE"
    MARK_PAID = "MARK_PAID"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

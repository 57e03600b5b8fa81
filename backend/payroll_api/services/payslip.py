# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from payroll_api.exceptions import InvalidInputError, NotFoundError
from payroll_api.models.base import now_utc
from payroll_api.models.enums import AuditAction, AuditEntityType, EmployeeStatus
from payroll_api.models.payslip import Payslip
from payroll_api.schemas.payslip import GeneratePayslipsResponse, PayslipListResponse, PayslipResponse
from payroll_api.services.audit import model_to_audit_dict, write_audit_log
from payroll_api.services.payroll_run import get_run_or_404

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from payroll_api.schemas.auth import AuthContext
    from payroll_api.services.employee import EmployeeInfo, EmployeeService

logger = logging.getLogger(__name__)


def _build_payslip_response(payslip: Payslip) -> PayslipResponse:
    """Map a payslip model to its response schema."""
    return PayslipResponse(
        id=payslip.id,
        employee_id=payslip.employee_id,
        payroll_run_id=payslip.payroll_run_id,
        gross=payslip.gross,
        deductions=payslip.deductions,
        net=payslip.net,
        paid_at=payslip.paid_at,
        created_at=payslip.created_at,
    )


def compute_deductions(employee: EmployeeInfo) -> Decimal:
    """Deductions withheld from an employee's gross pay for a run.

    Always zero for now.
    """
    # TODO: sum sanction deductions for the run's period once sanctions are exposed by the record store.
    return Decimal(0)


async def _get_payslip_or_404(session: AsyncSession, payslip_id: uuid.UUID) -> Payslip:
    payslip = await session.get(Payslip, payslip_id)
    if payslip is None:
        raise NotFoundError("Payslip not found")
    return payslip


async def _list_run_payslips(session: AsyncSession, run_id: uuid.UUID) -> list[Payslip]:
    result = await session.execute(
        select(Payslip).where(col(Payslip.payroll_run_id) == run_id).order_by(col(Payslip.created_at))
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def generate_payslips(
    session: AsyncSession,
    auth: AuthContext,
    run_id: uuid.UUID,
    employee_service: EmployeeService,
) -> GeneratePayslipsResponse:
    """Create one payslip per active employee that does not have one for the run yet.

    Idempotent: employees already paid by this run are skipped, and an insert
    that loses a race against the (employee_id, payroll_run_id) unique
    constraint is treated as already existing.
    """
    auth.require_admin()
    run = await get_run_or_404(session, run_id)

    existing_result = await session.execute(
        select(Payslip.employee_id).where(col(Payslip.payroll_run_id) == run.id)
    )
    existing_ids = set(existing_result.scalars().all())

    active_employees = await employee_service.list_employees(status=EmployeeStatus.ACTIVE)

    created = 0
    for employee in active_employees:
        if employee.id in existing_ids:
            continue
        gross = employee.salary
        deductions = compute_deductions(employee)
        payslip = Payslip(
            employee_id=employee.id,
            payroll_run_id=run.id,
            gross=gross,
            deductions=deductions,
            net=gross - deductions,
        )
        try:
            async with session.begin_nested():
                session.add(payslip)
                await session.flush()
        except IntegrityError:
            logger.warning("Payslip for employee %s on run %s already exists, skipping", employee.id, run.id)
            continue
        created += 1

    if created:
        await write_audit_log(
            session,
            actor_id=auth.user_id,
            entity_type=AuditEntityType.PAYROLL_RUN,
            entity_id=run.id,
            action=AuditAction.GENERATE,
            after_json={"created": created},
        )

    await session.commit()

    payslips = await _list_run_payslips(session, run.id)
    logger.info("Payroll run %s: %d payslips generated, %d total", run.id, created, len(payslips))
    return GeneratePayslipsResponse(
        count=len(payslips),
        created=created,
        payslips=[_build_payslip_response(p) for p in payslips],
    )


async def mark_paid(
    session: AsyncSession,
    auth: AuthContext,
    payslip_id: uuid.UUID,
) -> PayslipResponse:
    """Record that a payslip was paid. A payslip already marked paid keeps its original time.

    The owning run's status is not touched.
    """
    auth.require_admin()
    payslip = await _get_payslip_or_404(session, payslip_id)

    if payslip.paid_at is None:
        before_dict = model_to_audit_dict(payslip)
        payslip.paid_at = now_utc()
        await session.flush()

        await write_audit_log(
            session,
            actor_id=auth.user_id,
            entity_type=AuditEntityType.PAYSLIP,
            entity_id=payslip.id,
            action=AuditAction.MARK_PAID,
            before_json=before_dict,
            after_json=model_to_audit_dict(payslip),
        )
        await session.commit()
        await session.refresh(payslip)
        logger.info("Payslip %s marked paid", payslip.id)

    return _build_payslip_response(payslip)


async def get_payslip(session: AsyncSession, payslip_id: uuid.UUID) -> PayslipResponse:
    """Get a single payslip by ID."""
    payslip = await _get_payslip_or_404(session, payslip_id)
    return _build_payslip_response(payslip)


async def list_payslips(
    session: AsyncSession,
    payroll_run_id: uuid.UUID | None = None,
    employee_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 100,
) -> PayslipListResponse:
    """List payslips of a run, of an employee, or both."""
    if payroll_run_id is None and employee_id is None:
        raise InvalidInputError("Provide payroll_run_id or employee_id")

    filters = []
    if payroll_run_id is not None:
        filters.append(col(Payslip.payroll_run_id) == payroll_run_id)
    if employee_id is not None:
        filters.append(col(Payslip.employee_id) == employee_id)

    count_result = await session.execute(select(func.count()).select_from(Payslip).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(Payslip).where(*filters).order_by(col(Payslip.created_at)).offset(offset).limit(limit)
    )
    payslips = list(result.scalars().all())

    return PayslipListResponse(items=[_build_payslip_response(p) for p in payslips], total=total)

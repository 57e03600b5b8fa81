# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from payroll_api.exceptions import ConflictError, InvalidInputError, NotFoundError
from payroll_api.models.base import now_utc
from payroll_api.models.enums import AuditAction, AuditEntityType, PayrollRunStatus, PayrollStepName
from payroll_api.models.payroll_run import PayrollRun, PayrollRunStep
from payroll_api.schemas.payroll_run import (
    AdvanceStepResponse,
    PayrollRunDetailResponse,
    PayrollRunListResponse,
    PayrollRunResponse,
    PayrollRunStepResponse,
)
from payroll_api.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from payroll_api.schemas.auth import AuthContext
    from payroll_api.schemas.payroll_run import AdvanceStepPayload, CreatePayrollRunPayload

logger = logging.getLogger(__name__)

MIN_PERIOD_YEAR = 2000

# Canonical (order, name) sequence of a payroll run.
PAYROLL_STEPS: tuple[tuple[int, PayrollStepName], ...] = (
    (1, PayrollStepName.REPORT_UPLOADED),
    (2, PayrollStepName.AUDIT_APPROVED),
    (3, PayrollStepName.AUTH_APPROVED),
    (4, PayrollStepName.PAYMENT_DONE),
    (5, PayrollStepName.RECONCILED),
)

STEP_ORDER: dict[str, int] = {name.value: order for order, name in PAYROLL_STEPS}

# Run status after a step completes.
STATUS_AFTER_STEP: dict[str, PayrollRunStatus] = {
    PayrollStepName.REPORT_UPLOADED: PayrollRunStatus.AUDIT_PENDING,
    PayrollStepName.AUDIT_APPROVED: PayrollRunStatus.AUTH_PENDING,
    PayrollStepName.AUTH_APPROVED: PayrollRunStatus.PAYMENT_PENDING,
    PayrollStepName.PAYMENT_DONE: PayrollRunStatus.PAYMENT_DONE,
    PayrollStepName.RECONCILED: PayrollRunStatus.RECONCILED,
}

# Runs in these statuses are neither being prepared nor closed.
ACTIVE_RUN_STATUSES: tuple[str, ...] = tuple(
    s.value for s in PayrollRunStatus if s not in (PayrollRunStatus.DRAFT, PayrollRunStatus.RECONCILED)
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def validate_period(period_month: int, period_year: int) -> None:
    """Raise 400 unless month is 1..12 and year is at least 2000."""
    if not 1 <= period_month <= 12 or period_year < MIN_PERIOD_YEAR:
        raise InvalidInputError("Invalid period")


def build_run_response(run: PayrollRun) -> PayrollRunResponse:
    """Map a payroll run model to its response schema."""
    return PayrollRunResponse(
        id=run.id,
        period_month=run.period_month,
        period_year=run.period_year,
        status=PayrollRunStatus(run.status),
        budget_total=run.budget_total,
        created_at=run.created_at,
        updated_at=run.updated_at,
    )


def _build_step_response(step: PayrollRunStep) -> PayrollRunStepResponse:
    return PayrollRunStepResponse(
        id=step.id,
        payroll_run_id=step.payroll_run_id,
        step_order=step.step_order,
        step_name=step.step_name,
        completed_at=step.completed_at,
        completed_by=step.completed_by,
        payload=step.payload,
        created_at=step.created_at,
    )


async def get_run_or_404(session: AsyncSession, run_id: uuid.UUID) -> PayrollRun:
    """Fetch a payroll run by ID. Raises 404 if not found."""
    run = await session.get(PayrollRun, run_id)
    if run is None:
        raise NotFoundError("Payroll run not found")
    return run


async def _get_step(session: AsyncSession, run_id: uuid.UUID, step_name: str) -> PayrollRunStep | None:
    result = await session.execute(
        select(PayrollRunStep).where(
            col(PayrollRunStep.payroll_run_id) == run_id,
            col(PayrollRunStep.step_name) == step_name,
        )
    )
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def create_run(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreatePayrollRunPayload,
) -> PayrollRunResponse:
    """Open a payroll run in ``draft`` for a (month, year) period.

    At most one run exists per period. The existence check gives a clean
    409 in the common case; the unique constraint on (period_month,
    period_year) settles concurrent creations.
    """
    auth.require_admin()
    validate_period(payload.period_month, payload.period_year)

    result = await session.execute(
        select(PayrollRun.id).where(
            col(PayrollRun.period_month) == payload.period_month,
            col(PayrollRun.period_year) == payload.period_year,
        )
    )
    if result.scalar_one_or_none() is not None:
        raise ConflictError("Payroll run for this period already exists")

    run = PayrollRun(
        period_month=payload.period_month,
        period_year=payload.period_year,
        status=PayrollRunStatus.DRAFT.value,
        budget_total=payload.budget_total,
    )
    try:
        async with session.begin_nested():
            session.add(run)
            await session.flush()
    except IntegrityError:
        logger.warning("Concurrent creation of payroll run %02d/%d", payload.period_month, payload.period_year)
        raise ConflictError("Payroll run for this period already exists") from None

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.PAYROLL_RUN,
        entity_id=run.id,
        action=AuditAction.CREATE,
        after_json=model_to_audit_dict(run),
    )

    await session.commit()
    await session.refresh(run)
    logger.info("Payroll run %s created for %02d/%d", run.id, run.period_month, run.period_year)
    return build_run_response(run)


async def advance_step(
    session: AsyncSession,
    auth: AuthContext,
    run_id: uuid.UUID,
    payload: AdvanceStepPayload,
) -> AdvanceStepResponse:
    """Complete one canonical step of a run and move the run to its next status.

    1. Fetch run (404).
    2. Validate step name (400).
    3. Reject a step that is already completed (409).
    4. Record the step with its canonical order and the caller's payload.
    5. Derive the new run status from the completed step.
    6. Audit log and commit.

    Earlier steps are not required to be complete: a step may be recorded
    out of canonical order.
    """
    run = await get_run_or_404(session, run_id)

    step_name = payload.step_name
    step_order = STEP_ORDER.get(step_name) if step_name else None
    if step_name is None or step_order is None:
        raise InvalidInputError("Invalid step_name")

    step = await _get_step(session, run.id, step_name)
    if step is not None and step.completed_at is not None:
        raise ConflictError("Step already completed")

    before_dict = model_to_audit_dict(run)
    now = now_utc()

    try:
        async with session.begin_nested():
            if step is None:
                step = PayrollRunStep(
                    payroll_run_id=run.id,
                    step_order=step_order,
                    step_name=step_name,
                    completed_at=now,
                    completed_by=auth.user_id,
                    payload=payload.payload,
                )
                session.add(step)
            else:
                step.completed_at = now
                step.completed_by = auth.user_id
                step.payload = payload.payload
            await session.flush()
    except IntegrityError:
        logger.warning("Concurrent completion of step %s on payroll run %s", step_name, run.id)
        raise ConflictError("Step already completed") from None

    run.status = STATUS_AFTER_STEP[step_name].value
    run.updated_at = now
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.PAYROLL_RUN_STEP,
        entity_id=step.id,
        action=AuditAction.ADVANCE,
        before_json=before_dict,
        after_json=model_to_audit_dict(run),
    )

    await session.commit()
    await session.refresh(run)
    logger.info("Payroll run %s: step %s completed, status now %s", run.id, step_name, run.status)
    return AdvanceStepResponse(payroll_run=build_run_response(run), step_completed=step_name)


async def get_run(session: AsyncSession, run_id: uuid.UUID) -> PayrollRunDetailResponse:
    """Get a payroll run with its steps in canonical order."""
    run = await get_run_or_404(session, run_id)
    result = await session.execute(
        select(PayrollRunStep)
        .where(col(PayrollRunStep.payroll_run_id) == run.id)
        .order_by(col(PayrollRunStep.step_order))
    )
    steps = list(result.scalars().all())
    return PayrollRunDetailResponse(
        payroll_run=build_run_response(run),
        steps=[_build_step_response(s) for s in steps],
    )


async def list_runs(
    session: AsyncSession,
    period_month: int | None = None,
    period_year: int | None = None,
    status_filter: str | None = None,
    offset: int = 0,
    limit: int = 20,
) -> PayrollRunListResponse:
    """List payroll runs with optional filters, most recent period first."""
    filters = []
    if period_month is not None:
        filters.append(col(PayrollRun.period_month) == period_month)
    if period_year is not None:
        filters.append(col(PayrollRun.period_year) == period_year)
    if status_filter is not None:
        filters.append(col(PayrollRun.status) == status_filter)

    count_result = await session.execute(select(func.count()).select_from(PayrollRun).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(PayrollRun)
        .where(*filters)
        .order_by(col(PayrollRun.period_year).desc(), col(PayrollRun.period_month).desc())
        .offset(offset)
        .limit(limit)
    )
    runs = list(result.scalars().all())

    return PayrollRunListResponse(
        items=[build_run_response(r) for r in runs],
        total=total,
        limit=limit,
        offset=offset,
    )

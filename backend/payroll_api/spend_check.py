"""Diagnostics for a period's budget and spend figures.

Prints the totals the dashboard would show for a period, the payroll runs of
that period, and which of their payslips count as spent.

Run with:  python -m payroll_api.spend_check [--month M] [--year Y]
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from sqlalchemy import select
from sqlmodel import col

from payroll_api.config import configure_logging
from payroll_api.db import dispose_engine, session_scope
from payroll_api.models.base import now_utc
from payroll_api.models.payroll_run import PayrollRun
from payroll_api.models.payslip import Payslip
from payroll_api.services.budget import SPENT_RUN_STATUSES, compute_period_totals

logger = logging.getLogger(__name__)


async def run_spend_check(period_month: int, period_year: int) -> None:
    """Log the spend breakdown for one period."""
    async with session_scope() as session:
        totals = await compute_period_totals(session, period_month, period_year)
        logger.info(
            "Period %02d/%d: total_budget=%s total_spent=%s",
            period_month,
            period_year,
            totals.total_budget,
            totals.total_spent,
        )

        result = await session.execute(
            select(PayrollRun).where(
                col(PayrollRun.period_month) == period_month,
                col(PayrollRun.period_year) == period_year,
            )
        )
        runs = list(result.scalars().all())
        if not runs:
            logger.info("No payroll run for %02d/%d, nothing can count as spent", period_month, period_year)
            return

        for run in runs:
            slips_result = await session.execute(select(Payslip).where(col(Payslip.payroll_run_id) == run.id))
            slips = list(slips_result.scalars().all())
            run_counts = run.status in SPENT_RUN_STATUSES
            paid = sum(1 for s in slips if s.paid_at is not None)
            counted = len(slips) if run_counts else paid
            logger.info(
                "Run %s status=%s payslips=%d paid=%d counted_as_spent=%d",
                run.id,
                run.status,
                len(slips),
                paid,
                counted,
            )


def main() -> None:
    """Entry point for the spend diagnostics command."""
    today = now_utc().date()
    parser = argparse.ArgumentParser(description="Show budget and spend figures for a payroll period.")
    parser.add_argument("--month", type=int, default=today.month)
    parser.add_argument("--year", type=int, default=today.year)
    args = parser.parse_args()

    configure_logging()

    async def _run() -> None:
        try:
            await run_spend_check(args.month, args.year)
        finally:
            await dispose_engine()

    asyncio.run(_run())


if __name__ == "__main__":
    main()

"""Tests for payslip generation, idempotency, mark-paid, and listing."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from payroll_api.exceptions import NotFoundError
from payroll_api.models.audit import AuditLog
from payroll_api.models.enums import EmployeeStatus
from payroll_api.models.payroll_run import PayrollRun
from payroll_api.models.payslip import Payslip
from payroll_api.schemas.auth import AuthContext
from payroll_api.services import payslip as payslip_service
from payroll_api.services.employee import EmployeeInfo, InMemoryEmployeeService, set_employee_service

if TYPE_CHECKING:
    from collections.abc import Iterator

    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

ADMIN_ID = uuid.uuid4()
MINISTRY_ID = uuid.uuid4()

ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "Admin"}
AGENT_HEADERS = {"X-User-Id": str(uuid.uuid4()), "X-Role": "Agent"}

SALARIES = (Decimal("500.00"), Decimal("700.00"), Decimal("900.00"))


def _make_employee(salary: Decimal, status: EmployeeStatus = EmployeeStatus.ACTIVE) -> EmployeeInfo:
    return EmployeeInfo(
        id=uuid.uuid4(),
        ministry_id=MINISTRY_ID,
        employee_number=f"FIN-{uuid.uuid4().hex[:6]}",
        name="Ilunga",
        surname="Mwamba",
        position="Chef de Bureau",
        salary=salary,
        status=status,
    )


@pytest.fixture
def employee_service() -> Iterator[InMemoryEmployeeService]:
    """Registry seeded with three active employees."""
    svc = InMemoryEmployeeService()
    for salary in SALARIES:
        svc.seed(_make_employee(salary))
    set_employee_service(svc)
    yield svc


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


async def _create_run(client: AsyncClient, month: int = 3, year: int = 2026) -> dict[str, Any]:
    resp = await client.post(
        "/payroll-runs",
        json={"period_month": month, "period_year": year},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _generate(client: AsyncClient, run_id: str) -> Any:
    return await client.post(f"/payroll-runs/{run_id}/generate-payslips", headers=ADMIN_HEADERS)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


async def test_generate_one_payslip_per_active_employee(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    resp = await _generate(async_client, run["id"])
    assert resp.status_code == 200, resp.text

    data = resp.json()
    assert data["message"] == "Payslips generated"
    assert data["count"] == 3
    assert data["created"] == 3
    assert sorted(Decimal(p["gross"]) for p in data["payslips"]) == list(SALARIES)
    for payslip in data["payslips"]:
        assert Decimal(payslip["deductions"]) == 0
        assert Decimal(payslip["net"]) == Decimal(payslip["gross"])
        assert payslip["paid_at"] is None
        assert payslip["payroll_run_id"] == run["id"]


async def test_generate_is_idempotent(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    await _generate(async_client, run["id"])

    resp = await _generate(async_client, run["id"])
    assert resp.status_code == 200
    assert resp.json()["created"] == 0
    assert resp.json()["count"] == 3


async def test_generate_picks_up_new_employees(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    await _generate(async_client, run["id"])

    employee_service.seed(_make_employee(Decimal("1200.00")))
    resp = await _generate(async_client, run["id"])
    assert resp.json()["created"] == 1
    assert resp.json()["count"] == 4


async def test_generate_skips_inactive_employees(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    for status in (EmployeeStatus.SUSPENDED, EmployeeStatus.DECEASED, EmployeeStatus.RETIRED):
        employee_service.seed(_make_employee(Decimal("300.00"), status))

    run = await _create_run(async_client)
    resp = await _generate(async_client, run["id"])
    assert resp.json()["created"] == 3
    assert all(Decimal(p["gross"]) != Decimal("300.00") for p in resp.json()["payslips"])


async def test_generate_with_no_employees(async_client: AsyncClient) -> None:
    run = await _create_run(async_client)
    resp = await _generate(async_client, run["id"])
    assert resp.status_code == 200
    assert resp.json()["count"] == 0
    assert resp.json()["payslips"] == []


async def test_generate_unknown_run(async_client: AsyncClient) -> None:
    resp = await _generate(async_client, str(uuid.uuid4()))
    assert resp.status_code == 404


async def test_generate_requires_admin(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    resp = await async_client.post(f"/payroll-runs/{run['id']}/generate-payslips", headers=AGENT_HEADERS)
    assert resp.status_code == 403


async def test_generate_is_audited_only_when_creating(
    async_client: AsyncClient,
    db_session: AsyncSession,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    await _generate(async_client, run["id"])
    await _generate(async_client, run["id"])

    result = await db_session.execute(select(AuditLog).where(col(AuditLog.action) == "GENERATE"))
    entries = list(result.scalars().all())
    assert len(entries) == 1
    assert entries[0].after_json == {"created": 3}


async def test_generate_service_unknown_run(
    db_session: AsyncSession,
    employee_service: InMemoryEmployeeService,
) -> None:
    with pytest.raises(NotFoundError):
        await payslip_service.generate_payslips(
            db_session,
            AuthContext(user_id=ADMIN_ID, role="Admin"),
            uuid.uuid4(),
            employee_service,
        )


def test_compute_deductions_is_zero() -> None:
    assert payslip_service.compute_deductions(_make_employee(Decimal("500.00"))) == Decimal(0)


# ---------------------------------------------------------------------------
# Mark paid
# ---------------------------------------------------------------------------


async def test_mark_paid_sets_paid_at_once(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    payslip = (await _generate(async_client, run["id"])).json()["payslips"][0]

    first = await async_client.put(f"/payslips/{payslip['id']}/paid", headers=ADMIN_HEADERS)
    assert first.status_code == 200
    paid_at = first.json()["paid_at"]
    assert paid_at is not None

    second = await async_client.put(f"/payslips/{payslip['id']}/paid", headers=ADMIN_HEADERS)
    assert second.status_code == 200
    assert second.json()["paid_at"] == paid_at


async def test_mark_paid_leaves_run_status(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    payslip = (await _generate(async_client, run["id"])).json()["payslips"][0]
    await async_client.put(f"/payslips/{payslip['id']}/paid", headers=ADMIN_HEADERS)

    detail = await async_client.get(f"/payroll-runs/{run['id']}", headers=AGENT_HEADERS)
    assert detail.json()["payroll_run"]["status"] == "draft"


async def test_mark_paid_unknown_payslip(async_client: AsyncClient) -> None:
    resp = await async_client.put(f"/payslips/{uuid.uuid4()}/paid", headers=ADMIN_HEADERS)
    assert resp.status_code == 404


async def test_mark_paid_requires_admin(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    payslip = (await _generate(async_client, run["id"])).json()["payslips"][0]
    resp = await async_client.put(f"/payslips/{payslip['id']}/paid", headers=AGENT_HEADERS)
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def test_list_payslips_by_run_and_employee(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    payslips = (await _generate(async_client, run["id"])).json()["payslips"]

    by_run = await async_client.get("/payslips", params={"payroll_run_id": run["id"]}, headers=AGENT_HEADERS)
    assert by_run.status_code == 200
    assert by_run.json()["total"] == 3

    employee_id = payslips[0]["employee_id"]
    by_employee = await async_client.get("/payslips", params={"employee_id": employee_id}, headers=AGENT_HEADERS)
    assert [p["employee_id"] for p in by_employee.json()["items"]] == [employee_id]


async def test_list_payslips_requires_a_filter(async_client: AsyncClient) -> None:
    resp = await async_client.get("/payslips", headers=AGENT_HEADERS)
    assert resp.status_code == 400


async def test_get_payslip(
    async_client: AsyncClient,
    employee_service: InMemoryEmployeeService,
) -> None:
    run = await _create_run(async_client)
    payslip = (await _generate(async_client, run["id"])).json()["payslips"][0]

    resp = await async_client.get(f"/payslips/{payslip['id']}", headers=AGENT_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["id"] == payslip["id"]

    missing = await async_client.get(f"/payslips/{uuid.uuid4()}", headers=AGENT_HEADERS)
    assert missing.status_code == 404


async def test_payslip_unique_per_employee_and_run(db_session: AsyncSession) -> None:
    """The (employee_id, payroll_run_id) constraint backs generation idempotency."""
    run = PayrollRun(period_month=9, period_year=2031)
    db_session.add(run)
    await db_session.flush()

    employee_id = uuid.uuid4()
    db_session.add(Payslip(employee_id=employee_id, payroll_run_id=run.id, gross=Decimal(1), net=Decimal(1)))
    await db_session.flush()

    with pytest.raises(IntegrityError):
        async with db_session.begin_nested():
            db_session.add(
                Payslip(employee_id=employee_id, payroll_run_id=run.id, gross=Decimal(2), net=Decimal(2))
            )
            await db_session.flush()

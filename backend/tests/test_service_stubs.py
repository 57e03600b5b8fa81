"""Tests for the employee, ministry and inbox service stubs."""

from __future__ import annotations

import uuid
from decimal import Decimal

from payroll_api.models.enums import EmployeeStatus
from payroll_api.services.employee import EmployeeInfo, EmployeeService, InMemoryEmployeeService
from payroll_api.services.inbox import InboxService, InMemoryInboxService, MessageInfo, VerificationInfo
from payroll_api.services.ministry import InMemoryMinistryService, MinistryInfo, MinistryService

MINISTRY_A = uuid.uuid4()
MINISTRY_B = uuid.uuid4()


def _make_employee(
    ministry_id: uuid.UUID,
    name: str = "Mbuyi",
    status: EmployeeStatus = EmployeeStatus.ACTIVE,
) -> EmployeeInfo:
    return EmployeeInfo(
        id=uuid.uuid4(),
        ministry_id=ministry_id,
        employee_number=f"EMP-{name.upper()}",
        name=name,
        surname="Kalala",
        position="Agent",
        salary=Decimal("500.00"),
        status=status,
    )


def test_stubs_satisfy_protocols() -> None:
    assert isinstance(InMemoryEmployeeService(), EmployeeService)
    assert isinstance(InMemoryMinistryService(), MinistryService)
    assert isinstance(InMemoryInboxService(), InboxService)


# ---------------------------------------------------------------------------
# InMemoryEmployeeService tests
# ---------------------------------------------------------------------------


async def test_employee_service_get_not_found() -> None:
    svc = InMemoryEmployeeService()
    assert await svc.get_employee(uuid.uuid4()) is None


async def test_employee_service_seed_and_get() -> None:
    svc = InMemoryEmployeeService()
    emp = _make_employee(MINISTRY_A)
    svc.seed(emp)
    result = await svc.get_employee(emp.id)
    assert result is not None
    assert result.ministry_id == MINISTRY_A


async def test_employee_service_filters_by_status_and_ministry() -> None:
    svc = InMemoryEmployeeService()
    active_a = _make_employee(MINISTRY_A, "Ilunga")
    retired_a = _make_employee(MINISTRY_A, "Kabongo", EmployeeStatus.RETIRED)
    active_b = _make_employee(MINISTRY_B, "Tshibanda")
    for emp in (active_a, retired_a, active_b):
        svc.seed(emp)

    assert len(await svc.list_employees()) == 3
    assert {e.id for e in await svc.list_employees(status=EmployeeStatus.ACTIVE)} == {active_a.id, active_b.id}
    assert [e.id for e in await svc.list_employees(ministry_id=MINISTRY_A, status=EmployeeStatus.ACTIVE)] == [
        active_a.id
    ]
    assert await svc.count_employees(status=EmployeeStatus.ACTIVE) == 2
    assert await svc.count_employees(ministry_id=MINISTRY_B) == 1


# ---------------------------------------------------------------------------
# InMemoryMinistryService tests
# ---------------------------------------------------------------------------


async def test_ministry_service_seed_and_get() -> None:
    svc = InMemoryMinistryService()
    assert await svc.get_ministry(MINISTRY_A) is None
    svc.seed(
        MinistryInfo(
            id=MINISTRY_A,
            name="Ministère des Finances",
            code="FIN",
            sector_category="Finances",
            payment_day_of_month=23,
        )
    )
    result = await svc.get_ministry(MINISTRY_A)
    assert result is not None
    assert result.payment_day_of_month == 23
    assert len(await svc.list_ministries()) == 1


# ---------------------------------------------------------------------------
# InMemoryInboxService tests
# ---------------------------------------------------------------------------


async def test_inbox_counts_only_pending_and_unread() -> None:
    svc = InMemoryInboxService()
    employee_id = uuid.uuid4()
    svc.seed_verification(VerificationInfo(id=uuid.uuid4(), employee_id=employee_id, step="identity_check"))
    svc.seed_verification(
        VerificationInfo(id=uuid.uuid4(), employee_id=employee_id, step="position_check", status="approved")
    )
    svc.seed_message(MessageInfo(id=uuid.uuid4(), employee_id=employee_id, type="paie", title="Bulletin"))
    svc.seed_message(
        MessageInfo(id=uuid.uuid4(), employee_id=employee_id, type="paie", title="Ancien", read=True)
    )

    assert await svc.count_pending_verifications() == 1
    assert await svc.count_unread_messages() == 1

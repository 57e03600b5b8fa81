"""Seed script for development data.

Run with:  python -m payroll_api.seed

Registers ministries and employees in the stub registries, allocates this
month's budgets, and opens a payroll run taken through the report and audit
steps.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date

import httpx

BASE_URL = "http://localhost:8000"
ADMIN_USER_ID = "00000000-0000-0000-0000-000000000001"

HEADERS = {
    "Content-Type": "application/json",
    "X-User-Id": ADMIN_USER_ID,
    "X-Role": "Admin",
}

# Well-known ministry UUIDs
FINANCES_ID = "00000000-0000-0000-0000-00000000f001"
BUDGET_ID = "00000000-0000-0000-0000-00000000f002"
TRAVAIL_ID = "00000000-0000-0000-0000-00000000f003"

MINISTRIES = [
    {
        "id": FINANCES_ID,
        "name": "Ministère des Finances",
        "code": "FIN",
        "sector_category": "Finances",
        "payment_day_of_month": 23,
    },
    {
        "id": BUDGET_ID,
        "name": "Ministère du Budget",
        "code": "BUD",
        "sector_category": "Finances",
        "payment_day_of_month": 20,
    },
    {
        "id": TRAVAIL_ID,
        "name": "Ministère de l'Emploi et du Travail",
        "code": "TRA",
        "sector_category": "Travail",
        "payment_day_of_month": 25,
    },
]

EMPLOYEES = [
    {
        "id": "00000000-0000-0000-0000-0000000e0001",
        "ministry_id": FINANCES_ID,
        "employee_number": "FIN-0001",
        "name": "Mbuyi",
        "surname": "Kalala",
        "position": "Directeur de Cabinet",
        "salary": "2500000.00",
        "status": "active",
    },
    {
        "id": "00000000-0000-0000-0000-0000000e0002",
        "ministry_id": FINANCES_ID,
        "employee_number": "FIN-0002",
        "name": "Ilunga",
        "surname": "Mwamba",
        "position": "Chef de Bureau",
        "salary": "950000.00",
        "status": "active",
    },
    {
        "id": "00000000-0000-0000-0000-0000000e0003",
        "ministry_id": BUDGET_ID,
        "employee_number": "BUD-0001",
        "name": "Tshibanda",
        "surname": "Ngoy",
        "position": "Chef de Division",
        "salary": "1400000.00",
        "status": "active",
    },
    {
        "id": "00000000-0000-0000-0000-0000000e0004",
        "ministry_id": TRAVAIL_ID,
        "employee_number": "TRA-0001",
        "name": "Kabongo",
        "surname": "Mutombo",
        "position": "Agent",
        "salary": "450000.00",
        "status": "retired",
    },
]

# Budgets: (ministry_id, amount)
BUDGETS = [
    (FINANCES_ID, "12000000.00"),
    (BUDGET_ID, "8000000.00"),
    (TRAVAIL_ID, "5000000.00"),
]

SEED_STEPS = ("report_uploaded", "audit_approved")


async def _safe_post(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """POST with 409-conflict tolerance for idempotency."""
    resp = await client.post(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def _safe_put(client: httpx.AsyncClient, url: str, json: dict, label: str) -> dict | None:
    """PUT with 409-conflict tolerance; upserts are naturally idempotent."""
    resp = await client.put(url, json=json, headers=HEADERS)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already done)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_ministries(client: httpx.AsyncClient) -> None:
    print("\n--- Seeding ministries ---")
    for ministry in MINISTRIES:
        body = {k: v for k, v in ministry.items() if k != "id"}
        await _safe_put(client, f"{BASE_URL}/ministries/{ministry['id']}", body, str(ministry["name"]))


async def seed_employees(client: httpx.AsyncClient) -> None:
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        body = {k: v for k, v in emp.items() if k != "id"}
        await _safe_put(client, f"{BASE_URL}/employees/{emp['id']}", body, f"{emp['name']} {emp['surname']}")


async def seed_budgets(client: httpx.AsyncClient, today: date) -> None:
    """Allocate budgets for the current month. Re-running adds new allocation rows."""
    print("\n--- Seeding budgets ---")
    for ministry_id, amount in BUDGETS:
        await _safe_post(
            client,
            f"{BASE_URL}/budgets",
            {
                "ministry_id": ministry_id,
                "period_month": today.month,
                "period_year": today.year,
                "amount": amount,
            },
            f"Budget {amount} for {ministry_id}",
        )


async def seed_payroll_run(client: httpx.AsyncClient, today: date) -> None:
    print("\n--- Seeding payroll run ---")
    result = await _safe_post(
        client,
        f"{BASE_URL}/payroll-runs",
        {"period_month": today.month, "period_year": today.year},
        f"Payroll run {today.month:02d}/{today.year}",
    )
    if result is None:
        resp = await client.get(
            f"{BASE_URL}/payroll-runs",
            headers=HEADERS,
            params={"period_month": today.month, "period_year": today.year},
        )
        items = resp.json().get("items", []) if resp.status_code == 200 else []
        if not items:
            print("  [ERROR] Could not locate the current payroll run")
            return
        result = items[0]

    run_id = result["id"]
    for step_name in SEED_STEPS:
        await _safe_put(
            client,
            f"{BASE_URL}/payroll-runs/{run_id}/step",
            {"step_name": step_name, "payload": {"source": "seed"}},
            f"Step {step_name}",
        )
    await _safe_post(client, f"{BASE_URL}/payroll-runs/{run_id}/generate-payslips", {}, "Generate payslips")


async def main() -> None:
    print("=" * 60)
    print("  RDC Payroll: Development Seed Script")
    print("=" * 60)

    today = date.today()
    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            sys.exit(1)

        await seed_ministries(client)
        await seed_employees(client)
        await seed_budgets(client, today)
        await seed_payroll_run(client, today)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())

# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter

from payroll_api.api.deps import AdminDep, AuthDep, MinistryServiceDep
from payroll_api.exceptions import NotFoundError
from payroll_api.schemas.ministry import MinistryListResponse, MinistryResponse, UpsertMinistryRequest
from payroll_api.services.ministry import MinistryInfo

ministries_router = APIRouter(prefix="/ministries", tags=["ministries"])


def _to_response(ministry: MinistryInfo) -> MinistryResponse:
    return MinistryResponse(
        id=ministry.id,
        name=ministry.name,
        code=ministry.code,
        sector_category=ministry.sector_category,
        payment_day_of_month=ministry.payment_day_of_month,
    )


@ministries_router.put("/{ministry_id}", response_model=MinistryResponse)
async def upsert_ministry(
    ministry_id: uuid.UUID,
    payload: UpsertMinistryRequest,
    auth: AdminDep,
    svc: MinistryServiceDep,
) -> MinistryResponse:
    """Create or update a ministry in the stub registry (admin only)."""
    ministry = MinistryInfo(id=ministry_id, **payload.model_dump())
    svc.seed(ministry)  # ty: ignore[unresolved-attribute]
    return _to_response(ministry)


@ministries_router.get("/{ministry_id}", response_model=MinistryResponse)
async def get_ministry(
    ministry_id: uuid.UUID,
    auth: AuthDep,
    svc: MinistryServiceDep,
) -> MinistryResponse:
    """Get a ministry from the stub registry."""
    ministry = await svc.get_ministry(ministry_id)
    if ministry is None:
        raise NotFoundError("Ministry not found")
    return _to_response(ministry)


@ministries_router.get("", response_model=MinistryListResponse)
async def list_ministries(
    auth: AuthDep,
    svc: MinistryServiceDep,
) -> MinistryListResponse:
    """List ministries ordered by payment day."""
    ministries = sorted(await svc.list_ministries(), key=lambda m: m.payment_day_of_month)
    items = [_to_response(m) for m in ministries]
    return MinistryListResponse(items=items, total=len(items))

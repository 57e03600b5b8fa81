# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field


class UpsertMinistryRequest(BaseModel):
    """Request body for upserting a ministry in the stub service."""

    name: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=50)
    sector_category: str = Field(min_length=1, max_length=100)
    payment_day_of_month: int = Field(ge=1, le=31)


class MinistryResponse(BaseModel):
    """Response schema for a ministry."""

    id: uuid.UUID
    name: str
    code: str
    sector_category: str
    payment_day_of_month: int


class MinistryListResponse(BaseModel):
    """List of ministries."""

    items: list[MinistryResponse]
    total: int

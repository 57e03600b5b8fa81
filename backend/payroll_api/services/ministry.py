# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class MinistryInfo(BaseModel):
    """Ministry metadata from the government structure registry."""

    id: uuid.UUID
    name: str
    code: str
    sector_category: str  # e.g. "Souveraineté", "Finances"
    payment_day_of_month: int  # e.g. 23


@runtime_checkable
class MinistryService(Protocol):
    """Interface for the ministry registry."""

    async def get_ministry(self, ministry_id: uuid.UUID) -> MinistryInfo | None:
        """Fetch ministry metadata. Returns None if not found."""
        ...

    async def list_ministries(self) -> list[MinistryInfo]:
        """List all ministries."""
        ...


class InMemoryMinistryService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._ministries: dict[uuid.UUID, MinistryInfo] = {}

    def seed(self, ministry: MinistryInfo) -> None:
        """Seed a ministry for testing."""
        self._ministries[ministry.id] = ministry

    async def get_ministry(self, ministry_id: uuid.UUID) -> MinistryInfo | None:
        """Fetch ministry metadata. Returns None if not found."""
        return self._ministries.get(ministry_id)

    async def list_ministries(self) -> list[MinistryInfo]:
        """List all ministries."""
        return list(self._ministries.values())


_ministry_service: MinistryService = InMemoryMinistryService()


def get_ministry_service() -> MinistryService:
    """FastAPI dependency for the ministry registry."""
    return _ministry_service


def set_ministry_service(service: MinistryService) -> None:
    """Override the service (for testing or production wiring)."""
    global _ministry_service
    _ministry_service = service

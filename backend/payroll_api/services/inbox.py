"""Verification and messaging counters consumed by the dashboard."""

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class VerificationInfo(BaseModel):
    """One step of an employee's identity/position verification."""

    id: uuid.UUID
    employee_id: uuid.UUID
    step: str  # e.g. "identity_check"
    status: str = "pending"  # pending | approved | rejected


class MessageInfo(BaseModel):
    """A message addressed to an employee (pay notification, sanction, ...)."""

    id: uuid.UUID
    employee_id: uuid.UUID
    type: str
    title: str
    read: bool = False


@runtime_checkable
class InboxService(Protocol):
    """Interface for verification and message records."""

    async def count_pending_verifications(self) -> int:
        """Number of verification steps still pending."""
        ...

    async def count_unread_messages(self) -> int:
        """Number of messages not yet read."""
        ...


class InMemoryInboxService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._verifications: dict[uuid.UUID, VerificationInfo] = {}
        self._messages: dict[uuid.UUID, MessageInfo] = {}

    def seed_verification(self, verification: VerificationInfo) -> None:
        self._verifications[verification.id] = verification

    def seed_message(self, message: MessageInfo) -> None:
        self._messages[message.id] = message

    async def count_pending_verifications(self) -> int:
        return sum(1 for v in self._verifications.values() if v.status == "pending")

    async def count_unread_messages(self) -> int:
        return sum(1 for m in self._messages.values() if not m.read)


_inbox_service: InboxService = InMemoryInboxService()


def get_inbox_service() -> InboxService:
    """FastAPI dependency for the inbox service."""
    return _inbox_service


def set_inbox_service(service: InboxService) -> None:
    """Override the service (for testing or production wiring)."""
    global _inbox_service
    _inbox_service = service

from __future__ import annotations

from typing import Protocol

from index_auditor.app.events.models import AuditEvent


class AuditEventEmitter(Protocol):
    """
    Sink for audit lifecycle events.

    The coordinator awaits every emit, so implementations should return
    quickly and must not raise into the audit.
    """

    async def emit(self, event: AuditEvent) -> None:
        ...


class NullEventEmitter:
    """Discards every event. Default for non-streaming audits."""

    async def emit(self, event: AuditEvent) -> None:
        return

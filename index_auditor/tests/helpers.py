from __future__ import annotations

from typing import List

from index_auditor.app.events import AuditEvent, AuditEventType


class RecordingEventEmitter:
    """
    Emitter double that keeps every event in emission order.
    """

    def __init__(self) -> None:
        self.events: List[AuditEvent] = []

    async def emit(self, event: AuditEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> List[AuditEventType]:
        return [e.event_type for e in self.events]

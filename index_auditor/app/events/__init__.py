"""
Audit lifecycle events.

Events describe coordinator progress (audit, check and cluster load phases)
for streaming clients. They never carry authority over the report.
"""

from .models import AuditEvent, AuditEventType
from .emitter import AuditEventEmitter, NullEventEmitter
from .memory_emitter import MemoryQueueEventEmitter

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "AuditEventEmitter",
    "NullEventEmitter",
    "MemoryQueueEventEmitter",
]

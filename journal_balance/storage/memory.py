"""
In-memory audit storage.

Used by tests and by applications that read the trail back within one
process. Events are kept in insertion order.
"""

from typing import Optional
from uuid import UUID

from journal_balance.models.audit import AuditEvent, AuditEventType
from journal_balance.storage.interface import AuditStorageInterface, StorageFullError


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self, max_events: Optional[int] = None):
        """
        Args:
            max_events: Refuse appends beyond this many events. None means unbounded.
        """
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    def __len__(self) -> int:
        return len(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        if self._max_events is not None and len(self._events) >= self._max_events:
            raise StorageFullError(
                f"Audit storage holds its maximum of {self._max_events} events"
            )
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_type(
        self,
        event_type: AuditEventType,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        matches = [e for e in self._events if e.event_type == event_type]
        return matches[:limit] if limit is not None else matches

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

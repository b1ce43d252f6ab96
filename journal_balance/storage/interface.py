"""
Abstract Audit Storage Interface

DESIGN DECISION: Audit persistence sits behind an abstract interface.
The engine never needs storage; only the audit logger does, and only
when the embedding application wants events kept beyond the log stream.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from journal_balance.models.audit import AuditEvent, AuditEventType


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for one verification run, in chronological order.
        """
        pass

    @abstractmethod
    def get_events_by_type(
        self,
        event_type: AuditEventType,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        """
        Get events of one type, in chronological order.
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageFullError(StorageError):
    """The storage backend refuses further events."""
    pass

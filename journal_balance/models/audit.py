"""
Audit Models for Journal Balance

Every verification run leaves a trail of events: what was received,
what was rejected, and what each check concluded.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of a verification run has its own event type.
    """
    # Input
    ENTRIES_RECEIVED = "entries_received"
    ENTRY_REJECTED = "entry_rejected"
    SELF_REFERENCING_TOLERATED = "self_referencing_tolerated"

    # Checks
    JOURNAL_BALANCED = "journal_balanced"
    JOURNAL_UNBALANCED = "journal_unbalanced"
    BALANCES_COMPUTED = "balances_computed"
    EQUATION_HELD = "equation_held"
    EQUATION_FAILED = "equation_failed"
    UNCLASSIFIED_ACCOUNTS = "unclassified_accounts"
    LEDGER_BUILT = "ledger_built"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events from one verification run share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entries_received(12, correlation_id)
        event = AuditEventBuilder.equation_checked(result, correlation_id)

    Amounts go into `details` as strings so they survive JSON rendering
    without passing through float.
    """

    @staticmethod
    def entries_received(
        entry_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_RECEIVED,
            correlation_id=correlation_id,
            description=f"Received {entry_count} journal entries",
            details={
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def entry_rejected(
        error_code: str,
        error_message: str,
        entry_index: Optional[int],
        correlation_id: UUID
    ) -> AuditEvent:
        location = f"entry {entry_index}" if entry_index is not None else "input"
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Rejected {location}: {error_code}",
            details={
                "entry_index": entry_index,
            },
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def self_referencing_tolerated(
        entry_indexes: list[int],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SELF_REFERENCING_TOLERATED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{len(entry_indexes)} self-referencing entries treated as no-ops",
            details={
                "entry_indexes": entry_indexes,
            },
        )

    @staticmethod
    def journal_checked(
        total_debit: str,
        total_credit: str,
        is_balanced: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        if is_balanced:
            return AuditEvent(
                event_type=AuditEventType.JOURNAL_BALANCED,
                correlation_id=correlation_id,
                description=f"Journal balanced at {total_debit}",
                details={
                    "total_debit": total_debit,
                    "total_credit": total_credit,
                },
            )
        return AuditEvent(
            event_type=AuditEventType.JOURNAL_UNBALANCED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Journal unbalanced: debit {total_debit} != credit {total_credit}",
            details={
                "total_debit": total_debit,
                "total_credit": total_credit,
            },
        )

    @staticmethod
    def balances_computed(
        account_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCES_COMPUTED,
            correlation_id=correlation_id,
            description=f"Computed balances for {account_count} accounts",
            details={
                "account_count": account_count,
            },
        )

    @staticmethod
    def equation_checked(
        holds: bool,
        left_side: str,
        right_side: str,
        correlation_id: UUID
    ) -> AuditEvent:
        details = {
            "assets": left_side,
            "liabilities_equity_net_income": right_side,
        }
        if holds:
            return AuditEvent(
                event_type=AuditEventType.EQUATION_HELD,
                correlation_id=correlation_id,
                description="Accounting equation holds",
                details=details,
            )
        return AuditEvent(
            event_type=AuditEventType.EQUATION_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Accounting equation fails: {left_side} != {right_side}",
            details=details,
        )

    @staticmethod
    def unclassified_accounts(
        account_codes: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNCLASSIFIED_ACCOUNTS,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{len(account_codes)} accounts excluded from equation check",
            details={
                "account_codes": account_codes,
            },
        )

    @staticmethod
    def ledger_built(
        row_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_BUILT,
            correlation_id=correlation_id,
            description=f"Ledger built with {row_count} rows",
            details={
                "row_count": row_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_code=error_type,
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

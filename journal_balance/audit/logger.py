"""
Audit Logger

DESIGN DECISION: Every verification run is logged.
This provides:
1. Traceability of which journals were checked and with what outcome
2. Debugging capability when the equation fails
3. A record of rejected input

The audit logger:
- Always writes to the structured log
- Optionally persists to an AuditStorageInterface
- Gracefully handles storage failures (logs them, never raises)
- Supports correlation IDs to trace the events of one run
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from journal_balance.config import LoggingSettings, get_settings
from journal_balance.errors import JournalError
from journal_balance.models.audit import AuditEvent, AuditEventBuilder
from journal_balance.models.report import EquationResult, JournalTotals
from journal_balance.storage import AuditStorageInterface, StorageError


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog for the package.

    Sets the level of the `journal_balance` stdlib logger; handlers are
    left to the embedding application.
    """
    settings = settings or get_settings().logging

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_format
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("journal_balance").setLevel(settings.level)


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (if configured)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except StorageError as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_entries_received(
        self,
        entry_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log receipt of a journal."""
        self.log(AuditEventBuilder.entries_received(
            entry_count=entry_count,
            correlation_id=correlation_id,
        ))

    def log_entry_rejected(
        self,
        error: JournalError,
        correlation_id: UUID,
    ) -> None:
        """Log a validation error that stopped the run."""
        self.log(AuditEventBuilder.entry_rejected(
            error_code=type(error).__name__,
            error_message=str(error),
            entry_index=getattr(error, "entry_index", None),
            correlation_id=correlation_id,
        ))

    def log_self_referencing_tolerated(
        self,
        entry_indexes: list[int],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.self_referencing_tolerated(
            entry_indexes=entry_indexes,
            correlation_id=correlation_id,
        ))

    def log_journal_checked(
        self,
        totals: JournalTotals,
        correlation_id: UUID,
    ) -> None:
        """Log the debit/credit totals check."""
        self.log(AuditEventBuilder.journal_checked(
            total_debit=str(totals.total_debit),
            total_credit=str(totals.total_credit),
            is_balanced=totals.is_balanced,
            correlation_id=correlation_id,
        ))

    def log_balances_computed(
        self,
        account_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.balances_computed(
            account_count=account_count,
            correlation_id=correlation_id,
        ))

    def log_equation_checked(
        self,
        result: EquationResult,
        correlation_id: UUID,
    ) -> None:
        """Log the equation outcome, plus any accounts it had to skip."""
        if result.unclassified_accounts:
            self.log(AuditEventBuilder.unclassified_accounts(
                account_codes=list(result.unclassified_accounts),
                correlation_id=correlation_id,
            ))
        self.log(AuditEventBuilder.equation_checked(
            holds=result.holds,
            left_side=str(result.left_side),
            right_side=str(result.right_side),
            correlation_id=correlation_id,
        ))

    def log_ledger_built(
        self,
        row_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.ledger_built(
            row_count=row_count,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per verification run and pass it to every audit call.
    """
    return uuid4()

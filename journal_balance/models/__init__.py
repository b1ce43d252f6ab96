"""
Data Models Package

This package contains all Pydantic models used by the journal balance engine.
All data flowing through the engine must conform to these schemas.
"""

from journal_balance.models.journal import (
    AccountBalance,
    AccountClassification,
    AccountType,
    JournalEntry,
    NormalBalance,
    normalize_classification,
)
from journal_balance.models.chart import (
    AccountInfo,
    ChartOfAccounts,
)
from journal_balance.models.report import (
    EquationResult,
    JournalTotals,
    LedgerReport,
    LedgerRow,
    ValidationIssue,
    ValidationResult,
)
from journal_balance.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Journal models
    "AccountBalance",
    "AccountClassification",
    "AccountType",
    "JournalEntry",
    "NormalBalance",
    "normalize_classification",
    # Chart models
    "AccountInfo",
    "ChartOfAccounts",
    # Report models
    "EquationResult",
    "JournalTotals",
    "LedgerReport",
    "LedgerRow",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

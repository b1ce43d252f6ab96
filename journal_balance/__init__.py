"""
Journal Balance - Double-Entry Verification Engine

Pure functions that decide whether a set of double-entry postings
leaves the books in balance.

DESIGN PRINCIPLES:
1. Exact decimal arithmetic, never binary floating point
2. Invalid input is rejected, never clamped
3. No shared chart of accounts; classification is an argument
4. Every verification run can be audited
"""

from journal_balance.audit import AuditLogger, create_correlation_id
from journal_balance.engine import (
    build_ledger,
    check_accounting_equation,
    get_account_balances,
    is_journal_balanced,
    journal_totals,
    list_account_balances,
    verify_accounting_equation,
)
from journal_balance.errors import (
    InvalidAmountError,
    InvalidClassificationError,
    InvalidEntryError,
    JournalError,
    PrecisionError,
    SelfReferencingEntryError,
    UnclassifiedAccountError,
)
from journal_balance.models import (
    AccountBalance,
    AccountInfo,
    AccountType,
    ChartOfAccounts,
    EquationResult,
    JournalEntry,
    LedgerReport,
)
from journal_balance.orchestrator import LedgerVerificationFlow, create_verification_flow

__version__ = "1.0.0"

__all__ = [
    # Engine
    "build_ledger",
    "check_accounting_equation",
    "get_account_balances",
    "is_journal_balanced",
    "journal_totals",
    "list_account_balances",
    "verify_accounting_equation",
    # Models
    "AccountBalance",
    "AccountInfo",
    "AccountType",
    "ChartOfAccounts",
    "EquationResult",
    "JournalEntry",
    "LedgerReport",
    # Errors
    "InvalidAmountError",
    "InvalidClassificationError",
    "InvalidEntryError",
    "JournalError",
    "PrecisionError",
    "SelfReferencingEntryError",
    "UnclassifiedAccountError",
    # Orchestration
    "AuditLogger",
    "LedgerVerificationFlow",
    "create_correlation_id",
    "create_verification_flow",
]

"""Balance engine package."""

from journal_balance.engine.balance import (
    accumulate_balances,
    check_accounting_equation,
    classify_balances,
    get_account_balances,
    is_journal_balanced,
    journal_totals,
    list_account_balances,
    sum_journal,
    verify_accounting_equation,
)
from journal_balance.engine.ledger import (
    build_ledger,
    ledger_rows,
    ledger_type_totals,
    normal_balance_side,
)
from journal_balance.engine.precision import exact_arithmetic, ledger_context, sum_precision

__all__ = [
    "accumulate_balances",
    "build_ledger",
    "check_accounting_equation",
    "classify_balances",
    "exact_arithmetic",
    "get_account_balances",
    "is_journal_balanced",
    "journal_totals",
    "ledger_context",
    "ledger_rows",
    "ledger_type_totals",
    "list_account_balances",
    "normal_balance_side",
    "sum_journal",
    "sum_precision",
    "verify_accounting_equation",
]

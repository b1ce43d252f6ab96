"""
General ledger rows from a journal.

Unlike get_account_balances, the ledger keeps debit and credit totals
apart and presents each balance on the account's normal side, the way
a trial balance is read.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any, Optional

import structlog

from journal_balance.config import LedgerSettings
from journal_balance.engine.precision import exact_arithmetic
from journal_balance.models.chart import ChartOfAccounts
from journal_balance.models.journal import AccountType, JournalEntry, NormalBalance
from journal_balance.models.report import LedgerRow
from journal_balance.validation import EntryValidator


logger = structlog.get_logger(__name__)


def normal_balance_side(account_type: AccountType) -> NormalBalance:
    return AccountType(account_type).normal_balance


def build_ledger(
    entries: Iterable[Any],
    chart: ChartOfAccounts,
    settings: Optional[LedgerSettings] = None,
) -> list[LedgerRow]:
    """
    One row per account, sorted by code.

    Every chart account gets a row even without activity. Accounts that
    entries reference but the chart lacks get a row with no type, and
    their balance stays in the raw debit-minus-credit convention.
    """
    return ledger_rows(EntryValidator(settings).ensure_valid(entries), chart, settings)


def ledger_rows(
    valid: Sequence[JournalEntry],
    chart: ChartOfAccounts,
    settings: Optional[LedgerSettings] = None,
) -> list[LedgerRow]:
    """build_ledger for entries that have already been validated."""
    debits: dict[str, Decimal] = {}
    credits: dict[str, Decimal] = {}
    rows = []

    with exact_arithmetic(settings, [entry.amount for entry in valid]):
        for entry in valid:
            debit = entry.debit_account_code
            credit = entry.credit_account_code
            debits[debit] = debits.get(debit, Decimal(0)) + entry.amount
            credits[credit] = credits.get(credit, Decimal(0)) + entry.amount

        codes = set(chart.codes()) | debits.keys() | credits.keys()
        for code in sorted(codes):
            info = chart.get(code)
            account_type = info.type if info else None
            debit_total = debits.get(code, Decimal(0))
            credit_total = credits.get(code, Decimal(0))

            if account_type is not None and account_type.normal_balance is NormalBalance.CREDIT:
                balance = credit_total - debit_total
            else:
                balance = debit_total - credit_total

            rows.append(LedgerRow(
                code=code,
                name=info.name if info else "",
                account_type=account_type,
                debit=debit_total,
                credit=credit_total,
                balance=balance,
            ))

    unknown = [row.code for row in rows if row.account_type is None]
    if unknown:
        logger.warning("ledger_accounts_outside_chart", account_codes=unknown)

    return rows


def ledger_type_totals(rows: Iterable[LedgerRow]) -> dict[AccountType, Decimal]:
    """Sum of normal-side balances per account type. Untyped rows are skipped."""
    rows = list(rows)
    totals = {account_type: Decimal(0) for account_type in AccountType}
    with exact_arithmetic(amounts=[row.balance for row in rows]):
        for row in rows:
            if row.account_type is not None:
                totals[row.account_type] += row.balance
    return totals

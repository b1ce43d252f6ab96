"""
Journal Balance Engine

Three pure functions over a list of double-entry records:

1. is_journal_balanced       - total debits equal total credits
2. get_account_balances      - raw signed balance per account
3. verify_accounting_equation - Assets = Liabilities + Equity + (Income - Expenses)

DESIGN DECISION: Every entry is validated before any arithmetic. A
negative or non-finite amount raises InvalidAmountError; it never turns
into a quietly wrong balance.

DESIGN DECISION: The engine holds no state and reads no shared chart of
accounts. Classification is always an explicit argument.

Raw balances use one convention for every account: debits add, credits
subtract. Normalising by account type happens only in the equation check.

sum_journal, accumulate_balances and classify_balances do the arithmetic
for callers that have validated the entries themselves, such as the
verification flow, so a journal is validated once per run.
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Optional

import structlog

from journal_balance.config import LedgerSettings, get_settings
from journal_balance.engine.precision import exact_arithmetic
from journal_balance.errors import UnclassifiedAccountError
from journal_balance.models.journal import (
    AccountBalance,
    AccountClassification,
    AccountType,
    JournalEntry,
    NormalBalance,
    normalize_classification,
)
from journal_balance.models.report import EquationResult, JournalTotals
from journal_balance.validation import EntryValidator


logger = structlog.get_logger(__name__)


def _prepare(
    entries: Iterable[Any],
    settings: Optional[LedgerSettings],
) -> list[JournalEntry]:
    return EntryValidator(settings).ensure_valid(entries)


def _amounts(valid: Sequence[JournalEntry]) -> list[Decimal]:
    return [entry.amount for entry in valid]


# =============================================================================
# TOTALS CHECK
# =============================================================================

def sum_journal(
    valid: Sequence[JournalEntry],
    settings: Optional[LedgerSettings] = None,
) -> JournalTotals:
    """
    Debit and credit totals of entries that have already been validated.

    Callers holding raw records should use journal_totals() instead.
    """
    with exact_arithmetic(settings, _amounts(valid)):
        total_debit = sum((entry.amount for entry in valid), Decimal(0))
        total_credit = sum((entry.amount for entry in valid), Decimal(0))

    logger.debug(
        "journal_totals_computed",
        entry_count=len(valid),
        total_debit=str(total_debit),
        total_credit=str(total_credit),
    )
    return JournalTotals(
        total_debit=total_debit,
        total_credit=total_credit,
        entry_count=len(valid),
    )


def journal_totals(
    entries: Iterable[Any],
    settings: Optional[LedgerSettings] = None,
) -> JournalTotals:
    """
    Sum the debit side and the credit side of a journal independently.

    Raises:
        InvalidEntryError: for any entry that fails validation
    """
    return sum_journal(_prepare(entries, settings), settings)


def is_journal_balanced(
    entries: Iterable[Any],
    settings: Optional[LedgerSettings] = None,
) -> bool:
    """
    True if total debits equal total credits.

    Each entry posts its amount once to each side, so any list of valid
    entries balances; an empty list balances vacuously. The check exists
    to reject malformed input and to prove the sums are exact.
    """
    return journal_totals(entries, settings).is_balanced


# =============================================================================
# PER-ACCOUNT BALANCES
# =============================================================================

def accumulate_balances(
    valid: Sequence[JournalEntry],
    settings: Optional[LedgerSettings] = None,
) -> dict[str, Decimal]:
    """Raw debit-minus-credit balances of already validated entries."""
    balances: dict[str, Decimal] = {}
    with exact_arithmetic(settings, _amounts(valid)):
        for entry in valid:
            debit = entry.debit_account_code
            credit = entry.credit_account_code
            balances[debit] = balances.get(debit, Decimal(0)) + entry.amount
            balances[credit] = balances.get(credit, Decimal(0)) - entry.amount

    logger.debug(
        "account_balances_computed",
        entry_count=len(valid),
        account_count=len(balances),
    )
    return balances


def get_account_balances(
    entries: Iterable[Any],
    settings: Optional[LedgerSettings] = None,
) -> Mapping[str, Decimal]:
    """
    Net raw balance of every account referenced by the entries.

    Positive is a net debit position, negative a net credit position.
    Accounts that no entry references are absent, not zero.

    Returns:
        A read-only mapping {account_code: balance}
    """
    return MappingProxyType(accumulate_balances(_prepare(entries, settings), settings))


def list_account_balances(
    entries: Iterable[Any],
    settings: Optional[LedgerSettings] = None,
) -> list[AccountBalance]:
    """Raw balances as AccountBalance models, sorted by account code."""
    balances = get_account_balances(entries, settings)
    return [
        AccountBalance(account_code=code, balance=balances[code])
        for code in sorted(balances)
    ]


# =============================================================================
# ACCOUNTING EQUATION
# =============================================================================

def classify_balances(
    balances: Mapping[str, Decimal],
    account_types: AccountClassification,
    strict: Optional[bool] = None,
    settings: Optional[LedgerSettings] = None,
) -> EquationResult:
    """
    Total raw balances by account type.

    Credit-normal balances (liability, equity, income) are negated before
    summing. Accounts missing from `account_types` are left out of every
    total and listed in the result's `unclassified_accounts`.

    Raises:
        UnclassifiedAccountError: in strict mode, if any account in
            `balances` has no classification
        InvalidClassificationError: for an unknown account type
    """
    settings = settings or get_settings().ledger
    if strict is None:
        strict = settings.strict_classification

    classified = normalize_classification(account_types)

    unclassified = sorted(code for code in balances if code not in classified)
    if unclassified:
        if strict:
            raise UnclassifiedAccountError(unclassified)
        logger.warning(
            "unclassified_accounts_excluded",
            account_codes=unclassified,
        )

    totals = {account_type: Decimal(0) for account_type in AccountType}
    with exact_arithmetic(settings, balances.values()):
        for code, balance in balances.items():
            account_type = classified.get(code)
            if account_type is None:
                continue
            if account_type.normal_balance is NormalBalance.DEBIT:
                totals[account_type] += balance
            else:
                totals[account_type] -= balance

    result = EquationResult(
        assets=totals[AccountType.ASSET],
        liabilities=totals[AccountType.LIABILITY],
        equity=totals[AccountType.EQUITY],
        income=totals[AccountType.INCOME],
        expenses=totals[AccountType.EXPENSE],
        unclassified_accounts=tuple(unclassified),
    )

    logger.debug(
        "accounting_equation_checked",
        holds=result.holds,
        assets=str(result.left_side),
        right_side=str(result.right_side),
    )
    return result


def check_accounting_equation(
    entries: Iterable[Any],
    account_types: AccountClassification,
    strict: Optional[bool] = None,
    settings: Optional[LedgerSettings] = None,
) -> EquationResult:
    """
    Classify raw balances and total them by account type.

    Args:
        entries: Journal entries or raw entry records
        account_types: {account_code: account type}, total or partial
        strict: Raise on unclassified accounts instead of excluding them.
                Defaults to the strict_classification setting.

    Raises:
        UnclassifiedAccountError: in strict mode, if any referenced
            account has no classification
        InvalidClassificationError: for an unknown account type
    """
    settings = settings or get_settings().ledger
    # A bad classification is reported before any entry is read.
    normalize_classification(account_types)
    balances = accumulate_balances(_prepare(entries, settings), settings)
    return classify_balances(balances, account_types, strict=strict, settings=settings)


def verify_accounting_equation(
    entries: Iterable[Any],
    account_types: AccountClassification,
    strict: Optional[bool] = None,
    settings: Optional[LedgerSettings] = None,
) -> bool:
    """
    True if Assets == Liabilities + Equity + (Income - Expenses).

    Equality is exact; there is no tolerance.
    """
    return check_accounting_equation(
        entries, account_types, strict=strict, settings=settings
    ).holds

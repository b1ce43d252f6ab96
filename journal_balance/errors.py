"""
Journal Balance Exceptions

Every error raised by this package derives from JournalError.

DESIGN DECISION: Invalid input is rejected, never clamped or corrected.
The same input fails the same way every time, so nothing is retried.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional


class JournalError(Exception):
    """Base exception for journal balance operations."""
    pass


class InvalidEntryError(JournalError):
    """An entry could not be read as a journal entry at all."""

    def __init__(self, message: str, entry_index: Optional[int] = None):
        super().__init__(message)
        self.entry_index = entry_index


class InvalidAmountError(InvalidEntryError):
    """
    Amount is negative, not finite, or not exactly representable.
    """

    def __init__(
        self,
        message: str,
        amount: Any = None,
        entry_index: Optional[int] = None,
    ):
        super().__init__(message, entry_index=entry_index)
        self.amount = amount


class SelfReferencingEntryError(InvalidEntryError):
    """Debit and credit side of one entry name the same account."""

    def __init__(self, account_code: str, entry_index: Optional[int] = None):
        super().__init__(
            f"Entry debits and credits the same account '{account_code}'",
            entry_index=entry_index,
        )
        self.account_code = account_code


class UnclassifiedAccountError(JournalError):
    """Referenced accounts have no classification (strict mode only)."""

    def __init__(self, account_codes: Iterable[str]):
        self.account_codes = sorted(account_codes)
        super().__init__(
            "Accounts missing from classification: "
            + ", ".join(self.account_codes)
        )


class InvalidClassificationError(JournalError):
    """A classification names an account type that does not exist."""

    def __init__(self, account_code: str, account_type: Any):
        super().__init__(
            f"Account '{account_code}' has unknown type {account_type!r}"
        )
        self.account_code = account_code
        self.account_type = account_type


class PrecisionError(JournalError):
    """Decimal arithmetic would have had to round."""

    def __init__(self, message: str, partial: Optional[Decimal] = None):
        super().__init__(message)
        self.partial = partial

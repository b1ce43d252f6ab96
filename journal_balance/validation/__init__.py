"""Validation package."""

from journal_balance.validation.validator import EntryValidator, referenced_accounts

__all__ = ["EntryValidator", "referenced_accounts"]

"""
Chart of Accounts

A named enumeration of account codes and their types, supplied by the
surrounding application.

DESIGN DECISION: There is no module-level chart. Callers build a
ChartOfAccounts and pass it (or its classification) explicitly, so the
engine never depends on shared state.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from journal_balance.models.journal import AccountType


class AccountInfo(BaseModel):
    """One account in the chart."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    code: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=200)
    type: AccountType

    @field_validator('code', mode='before')
    @classmethod
    def accept_integer_code(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ChartOfAccounts(BaseModel):
    """
    An immutable chart of accounts.

    Usage:
        chart = ChartOfAccounts.from_records([
            {"code": "1100", "name": "Kas", "type": "asset"},
            {"code": "3000", "name": "Modal", "type": "equity"},
        ])
        verify_accounting_equation(entries, chart.account_types())
    """
    model_config = ConfigDict(frozen=True)

    accounts: tuple[AccountInfo, ...] = ()

    @model_validator(mode='after')
    def reject_duplicate_codes(self) -> 'ChartOfAccounts':
        seen = set()
        for account in self.accounts:
            if account.code in seen:
                raise ValueError(f"Duplicate account code in chart: {account.code}")
            seen.add(account.code)
        return self

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> 'ChartOfAccounts':
        return cls(accounts=tuple(AccountInfo.model_validate(r) for r in records))

    def get(self, code: str) -> Optional[AccountInfo]:
        for account in self.accounts:
            if account.code == code:
                return account
        return None

    def name_for(self, code: str) -> str:
        """Account name, or an empty string for an unknown code."""
        account = self.get(code)
        return account.name if account else ""

    def codes(self) -> list[str]:
        return [account.code for account in self.accounts]

    def account_types(self) -> dict[str, AccountType]:
        """Classification mapping suitable for the equation check."""
        return {account.code: account.type for account in self.accounts}

    def __len__(self) -> int:
        return len(self.accounts)

    def __contains__(self, code: object) -> bool:
        return self.get(code) is not None if isinstance(code, str) else False

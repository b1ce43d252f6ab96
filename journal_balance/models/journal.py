"""
Journal Data Models

These models define the inputs to the balance engine: journal entries and
the classification of accounts into the five fundamental account types.

DESIGN DECISION: Amounts are Decimal end to end. Binary floating point is
never used for monetary values; a float handed in by a caller is read
through its shortest decimal representation (0.1 -> Decimal("0.1")).

Sign and finiteness of amounts are NOT enforced here. A JournalEntry can
hold a bad amount so that validation can report it with the entry index
instead of failing somewhere inside model construction.
"""

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from journal_balance.errors import (
    InvalidAmountError,
    InvalidClassificationError,
    InvalidEntryError,
)


# =============================================================================
# ENUMS
# =============================================================================

class NormalBalance(str, Enum):
    """The side on which an account type's balance is conventionally positive."""
    DEBIT = "debit"
    CREDIT = "credit"


class AccountType(str, Enum):
    """
    The five fundamental account types.

    Asset and expense accounts are debit-normal; liability, equity and
    income accounts are credit-normal.
    """
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def normal_balance(self) -> NormalBalance:
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return NormalBalance.DEBIT
        return NormalBalance.CREDIT


# Account code -> account type, total or partial. Values may be plain strings.
AccountClassification = Mapping[str, Union[AccountType, str]]


# =============================================================================
# JOURNAL ENTRY
# =============================================================================

def _code_field(name: str, camel: str, nested: str) -> Any:
    return Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices(name, camel, AliasPath(nested, "code")),
        description="Account code",
    )


class JournalEntry(BaseModel):
    """
    A single paired debit/credit posting.

    The amount is simultaneously one debit to `debit_account_code` and one
    credit of equal size to `credit_account_code`.

    Raw records from the surrounding application can be validated directly:
        JournalEntry.model_validate({"debit_account": {"code": "1100"},
                                     "credit_account": {"code": "3000"},
                                     "amount": 1000})
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    debit_account_code: str = _code_field(
        "debit_account_code", "debitAccountCode", "debit_account"
    )
    credit_account_code: str = _code_field(
        "credit_account_code", "creditAccountCode", "credit_account"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=True,
        description="Amount in the ledger's base currency subunit"
    )

    @field_validator('debit_account_code', 'credit_account_code', mode='before')
    @classmethod
    def accept_integer_codes(cls, v: Any) -> Any:
        """Chart codes like 1100 often arrive as integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def read_amount(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Amount must be a number, not a boolean")
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @property
    def is_self_referencing(self) -> bool:
        return self.debit_account_code == self.credit_account_code

    @classmethod
    def coerce(cls, value: Any, index: Optional[int] = None) -> "JournalEntry":
        """
        Turn a JournalEntry or a raw mapping into a JournalEntry.

        Raises:
            InvalidAmountError: if only the amount could not be read
            InvalidEntryError: for any other malformed record
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidEntryError(
                f"Expected a journal entry or mapping, got {type(value).__name__}",
                entry_index=index,
            )
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            errors = e.errors()
            if errors and all(err["loc"][:1] == ("amount",) for err in errors):
                raise InvalidAmountError(
                    f"Unreadable amount: {errors[0]['msg']}",
                    amount=value.get("amount"),
                    entry_index=index,
                ) from e
            raise InvalidEntryError(
                f"Malformed journal entry: {e.error_count()} error(s)",
                entry_index=index,
            ) from e


# =============================================================================
# DERIVED OUTPUT
# =============================================================================

class AccountBalance(BaseModel):
    """
    Raw net balance of one account.

    Positive means a net debit position, negative a net credit position.
    This is not normalised by account type.
    """
    model_config = ConfigDict(frozen=True)

    account_code: str
    balance: Decimal


def normalize_classification(
    account_types: AccountClassification,
) -> dict[str, AccountType]:
    """
    Convert a classification mapping to {code: AccountType}.

    Raises:
        InvalidClassificationError: for a value that is not an account type
    """
    normalized = {}
    for code, account_type in account_types.items():
        key = str(code).strip()
        if isinstance(account_type, AccountType):
            normalized[key] = account_type
            continue
        try:
            normalized[key] = AccountType(str(account_type).strip().lower())
        except ValueError:
            raise InvalidClassificationError(key, account_type) from None
    return normalized

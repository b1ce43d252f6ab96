"""
Result Models for Journal Balance

Everything the engine and the verification flow hand back to callers.
All monetary values are exact Decimals; nothing here rounds.
"""

from datetime import datetime, timezone
from decimal import MAX_PREC, Context, Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from journal_balance.models.journal import AccountType


# Derived sums of already-exact totals; precision only bounds, never rounds here
_EXACT = Context(prec=MAX_PREC)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENGINE RESULTS
# =============================================================================

class JournalTotals(BaseModel):
    """Debit and credit totals of a journal."""
    model_config = ConfigDict(frozen=True)

    total_debit: Decimal = Decimal(0)
    total_credit: Decimal = Decimal(0)
    entry_count: int = Field(default=0, ge=0)

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


class EquationResult(BaseModel):
    """
    Outcome of the accounting equation check.

    Totals are normalised to each type's normal balance side, so a
    credit-heavy liability account contributes a positive `liabilities`.

        assets == liabilities + equity + (income - expenses)
    """
    model_config = ConfigDict(frozen=True)

    assets: Decimal = Decimal(0)
    liabilities: Decimal = Decimal(0)
    equity: Decimal = Decimal(0)
    income: Decimal = Decimal(0)
    expenses: Decimal = Decimal(0)

    # Referenced accounts left out of every total
    unclassified_accounts: tuple[str, ...] = ()

    @property
    def net_income(self) -> Decimal:
        return _EXACT.subtract(self.income, self.expenses)

    @property
    def left_side(self) -> Decimal:
        return self.assets

    @property
    def right_side(self) -> Decimal:
        return _EXACT.add(_EXACT.add(self.liabilities, self.equity), self.net_income)

    @property
    def difference(self) -> Decimal:
        """Assets minus the right-hand side; zero when the equation holds."""
        return _EXACT.subtract(self.left_side, self.right_side)

    @property
    def holds(self) -> bool:
        return self.left_side == self.right_side

    @property
    def is_complete(self) -> bool:
        """True when every referenced account was classified."""
        return not self.unclassified_accounts


class LedgerRow(BaseModel):
    """
    One account line of the general ledger.

    `balance` is normalised to the account's normal side: debit-normal
    accounts show debit - credit, credit-normal accounts show
    credit - debit. Accounts without a type keep debit - credit.
    """
    model_config = ConfigDict(frozen=True)

    code: str
    name: str = ""
    account_type: Optional[AccountType] = None
    debit: Decimal = Decimal(0)
    credit: Decimal = Decimal(0)
    balance: Decimal = Decimal(0)

    @property
    def is_contra_position(self) -> bool:
        """Balance sits on the side opposite the account's normal side."""
        return self.balance < 0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'negative_amount', 'self_referencing')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    entry_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Position of the offending entry, if entry-level"
    )
    account_code: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Entry structure (amounts, self-references)
    Stage 2: Classification coverage
    """

    validated_at: datetime = Field(
        default_factory=_utcnow
    )
    entry_count: int = Field(default=0, ge=0)

    entries_valid: bool = Field(
        ...,
        description="Did every entry pass stage 1?"
    )
    classification_valid: bool = Field(
        default=True,
        description="Did classification coverage pass stage 2?"
    )

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    # Warnings don't block but should be shown
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def is_valid(self) -> bool:
        return self.entries_valid and self.classification_valid

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# VERIFICATION REPORT
# =============================================================================

class LedgerReport(BaseModel):
    """
    Everything one verification run produced.

    `equation` is None when no classification was supplied.
    `ledger` is empty unless a chart of accounts was supplied.
    """

    report_id: UUID = Field(
        default_factory=uuid4
    )
    correlation_id: UUID
    generated_at: datetime = Field(
        default_factory=_utcnow
    )

    totals: JournalTotals
    balances: dict[str, Decimal] = Field(default_factory=dict)
    equation: Optional[EquationResult] = None
    ledger: list[LedgerRow] = Field(default_factory=list)
    validation: ValidationResult

    @property
    def is_balanced(self) -> bool:
        return self.totals.is_balanced

    @property
    def equation_holds(self) -> Optional[bool]:
        if self.equation is None:
            return None
        return self.equation.holds

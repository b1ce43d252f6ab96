"""
Two-Stage Validation Pipeline

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - ENTRY VALIDATION:
- Record shape (both account codes present, amount readable)
- Amount is finite and non-negative
- Amount fits the ledger's decimal precision
- Debit and credit accounts differ (policy-dependent)

STAGE 2 - CLASSIFICATION VALIDATION:
- Every account type is one of the five fundamental types
- Every referenced account has a type (warning, or error in strict mode)

Stage 2 only runs when a classification is supplied.

IMPORTANT: Validation NEVER silently fixes issues. An entry with a bad
amount is reported, not clamped. The engine calls ensure_valid(), which
raises the first error as its typed exception.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Any, Optional

import structlog

from journal_balance.config import LedgerSettings, get_settings
from journal_balance.errors import (
    InvalidAmountError,
    InvalidClassificationError,
    InvalidEntryError,
    JournalError,
    SelfReferencingEntryError,
    UnclassifiedAccountError,
)
from journal_balance.models.journal import (
    AccountClassification,
    JournalEntry,
    normalize_classification,
)
from journal_balance.models.report import ValidationIssue, ValidationResult


logger = structlog.get_logger(__name__)


def _significant_digits(amount: Decimal) -> tuple[int, int]:
    """
    (significant digits, fractional digits) ignoring trailing zeros.

    Decimal("1.500") -> (2, 1); Decimal("1500") -> (2, 0).
    """
    _, digits, exponent = amount.as_tuple()
    if not any(digits):
        return 1, 0
    trailing = 0
    for digit in reversed(digits):
        if digit != 0:
            break
        trailing += 1
    significant = max(len(digits) - trailing, 1)
    fractional = max(-(exponent + trailing), 0)
    return significant, fractional


def referenced_accounts(entries: Iterable[JournalEntry]) -> set[str]:
    """Every account code that appears on either side of an entry."""
    codes = set()
    for entry in entries:
        codes.add(entry.debit_account_code)
        codes.add(entry.credit_account_code)
    return codes


class EntryValidator:
    """
    Validates journal entries and account classifications.

    Stage 1: Entry validation (always runs)
    Stage 2: Classification validation (when a classification is given)
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Ledger policy. Loaded from the environment if None.
        """
        self._settings = settings or get_settings().ledger

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    def check_amount(
        self,
        amount: Decimal,
        entry_index: Optional[int] = None,
    ) -> Optional[InvalidAmountError]:
        """Return the problem with an amount, or None if it is usable."""
        if not amount.is_finite():
            return InvalidAmountError(
                f"Amount must be finite, got {amount}",
                amount=amount,
                entry_index=entry_index,
            )
        if amount < 0:
            return InvalidAmountError(
                f"Amount must not be negative, got {amount}",
                amount=amount,
                entry_index=entry_index,
            )

        significant, fractional = _significant_digits(amount)
        if fractional > self._settings.max_decimal_places:
            return InvalidAmountError(
                f"Amount {amount} has {fractional} decimal places, "
                f"ledger allows {self._settings.max_decimal_places}",
                amount=amount,
                entry_index=entry_index,
            )
        if significant > self._settings.decimal_precision:
            return InvalidAmountError(
                f"Amount {amount} exceeds ledger precision of "
                f"{self._settings.decimal_precision} digits",
                amount=amount,
                entry_index=entry_index,
            )
        return None

    def _validate_entries(
        self,
        entries: Iterable[Any],
    ) -> tuple[list[JournalEntry], list[ValidationIssue], list[JournalError]]:
        """
        Stage 1: Entry validation.

        Returns: (readable_entries, issues, errors_in_order)
        """
        readable = []
        issues = []
        errors = []

        for index, raw in enumerate(entries):
            try:
                entry = JournalEntry.coerce(raw, index=index)
            except InvalidAmountError as e:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="unreadable_amount",
                    message=str(e),
                    severity="error",
                    entry_index=index,
                ))
                errors.append(e)
                continue
            except InvalidEntryError as e:
                issues.append(ValidationIssue(
                    field="entry",
                    issue_type="malformed",
                    message=str(e),
                    severity="error",
                    entry_index=index,
                ))
                errors.append(e)
                continue

            amount_error = self.check_amount(entry.amount, entry_index=index)
            if amount_error is not None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_amount",
                    message=str(amount_error),
                    severity="error",
                    entry_index=index,
                ))
                errors.append(amount_error)
                continue

            if entry.is_self_referencing:
                code = entry.debit_account_code
                if self._settings.self_reference_policy == "reject":
                    error = SelfReferencingEntryError(code, entry_index=index)
                    issues.append(ValidationIssue(
                        field="debit_account_code",
                        issue_type="self_referencing",
                        message=str(error),
                        severity="error",
                        entry_index=index,
                        account_code=code,
                    ))
                    errors.append(error)
                    continue
                logger.warning(
                    "self_referencing_entry_tolerated",
                    entry_index=index,
                    account_code=code,
                )
                issues.append(ValidationIssue(
                    field="debit_account_code",
                    issue_type="self_referencing",
                    message=f"Entry {index} debits and credits '{code}' (no effect)",
                    severity="warning",
                    entry_index=index,
                    account_code=code,
                ))

            readable.append(entry)

        return readable, issues, errors

    def _validate_classification(
        self,
        entries: Iterable[JournalEntry],
        account_types: AccountClassification,
        strict: bool,
    ) -> tuple[list[ValidationIssue], list[JournalError]]:
        """
        Stage 2: Classification validation.

        Returns: (issues, errors_in_order)
        """
        try:
            classified = normalize_classification(account_types)
        except InvalidClassificationError as e:
            return [ValidationIssue(
                field="account_types",
                issue_type="invalid_classification",
                message=str(e),
                severity="error",
                account_code=e.account_code,
            )], [e]

        missing = sorted(referenced_accounts(entries) - classified.keys())
        if not missing:
            return [], []

        severity = "error" if strict else "warning"
        issues = [
            ValidationIssue(
                field="account_types",
                issue_type="unclassified_account",
                message=f"Account '{code}' has no classification",
                severity=severity,
                account_code=code,
            )
            for code in missing
        ]
        errors = [UnclassifiedAccountError(missing)] if strict else []
        return issues, errors

    def validate(
        self,
        entries: Iterable[Any],
        account_types: Optional[AccountClassification] = None,
        strict: Optional[bool] = None,
    ) -> ValidationResult:
        """
        Run the full two-stage validation pipeline without raising.

        Args:
            entries: Journal entries or raw entry records
            account_types: Classification to check coverage against
            strict: Treat unclassified accounts as errors.
                    Defaults to the strict_classification setting.

        Returns:
            ValidationResult with all issues found
        """
        result, _, _ = self.check(entries, account_types, strict)
        return result

    def ensure_valid(
        self,
        entries: Iterable[Any],
        account_types: Optional[AccountClassification] = None,
        strict: Optional[bool] = None,
    ) -> list[JournalEntry]:
        """
        Validate and return the entries as JournalEntry objects.

        Raises:
            JournalError: the first error found, as its typed subclass
        """
        _, readable, errors = self.check(entries, account_types, strict)
        if errors:
            raise errors[0]
        return readable

    def check(
        self,
        entries: Iterable[Any],
        account_types: Optional[AccountClassification] = None,
        strict: Optional[bool] = None,
    ) -> tuple[ValidationResult, list[JournalEntry], list[JournalError]]:
        """
        Both stages in one pass.

        Returns: (result, readable_entries, errors_in_order)
        """
        entries = list(entries)
        if strict is None:
            strict = self._settings.strict_classification

        readable, issues, errors = self._validate_entries(entries)
        entries_valid = not errors

        classification_valid = True
        if account_types is not None:
            class_issues, class_errors = self._validate_classification(
                readable, account_types, strict
            )
            issues.extend(class_issues)
            errors.extend(class_errors)
            classification_valid = not class_errors

        result = ValidationResult(
            entry_count=len(entries),
            entries_valid=entries_valid,
            classification_valid=classification_valid,
            issues=issues,
            warnings=[i.message for i in issues if i.severity == "warning"],
        )
        return result, readable, errors

    def describe(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Plain-text summary of a validation result.
        """
        if result.is_valid and not result.warnings:
            return f"All {result.entry_count} entries passed validation."

        lines = []

        if result.has_errors:
            lines.append(f"{result.error_count} problem(s) must be fixed:")
            for issue in result.issues:
                if issue.severity == "error":
                    prefix = (
                        f"entry {issue.entry_index}: "
                        if issue.entry_index is not None else ""
                    )
                    lines.append(f"  - {prefix}{issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Warnings:")
            for warning in result.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)

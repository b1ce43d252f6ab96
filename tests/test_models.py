"""
Tests for Journal Balance models

Test strategy:
1. Unit tests for individual models (entries, chart, results)
2. Flow tests live in test_orchestrator.py
3. No I/O anywhere
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from journal_balance.errors import (
    InvalidAmountError,
    InvalidClassificationError,
    InvalidEntryError,
)
from journal_balance.models import (
    AccountBalance,
    AccountInfo,
    AccountType,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    ChartOfAccounts,
    EquationResult,
    JournalEntry,
    JournalTotals,
    NormalBalance,
    ValidationIssue,
    ValidationResult,
    normalize_classification,
)


class TestJournalEntry:
    """Tests for the JournalEntry model."""

    def test_entry_creation(self):
        """Test JournalEntry creation by field name."""
        entry = JournalEntry(
            debit_account_code="1100",
            credit_account_code="3000",
            amount=Decimal("1000"),
        )
        assert entry.debit_account_code == "1100"
        assert entry.amount == Decimal("1000")
        assert entry.is_self_referencing is False

    def test_entry_from_joined_row(self):
        """Test the nested {debit_account: {code}} record shape."""
        entry = JournalEntry.model_validate({
            "debit_account": {"code": "1100"},
            "credit_account": {"code": "4000"},
            "amount": 800,
        })
        assert entry.debit_account_code == "1100"
        assert entry.credit_account_code == "4000"
        assert entry.amount == Decimal("800")

    def test_entry_from_camel_case(self):
        """Test camelCase record keys."""
        entry = JournalEntry.model_validate({
            "debitAccountCode": "1500",
            "creditAccountCode": "1100",
            "amount": "500.25",
        })
        assert entry.amount == Decimal("500.25")

    def test_integer_codes_become_strings(self):
        """Test that integer account codes are accepted."""
        entry = JournalEntry(debit_account_code=1100, credit_account_code=3000, amount=1)
        assert entry.debit_account_code == "1100"

    def test_codes_strip_whitespace(self):
        """Test that whitespace is stripped from codes."""
        entry = JournalEntry(debit_account_code=" 1100 ", credit_account_code="3000", amount=1)
        assert entry.debit_account_code == "1100"

    def test_empty_code_rejected(self):
        """Test that a blank code is malformed."""
        with pytest.raises(ValidationError):
            JournalEntry(debit_account_code="  ", credit_account_code="3000", amount=1)

    def test_float_amount_uses_decimal_repr(self):
        """Test 0.1 becomes Decimal('0.1'), not its binary expansion."""
        entry = JournalEntry(debit_account_code="A", credit_account_code="B", amount=0.1)
        assert entry.amount == Decimal("0.1")

    def test_negative_amount_is_held_for_validation(self):
        """Test the model keeps bad amounts so validation can report them."""
        entry = JournalEntry(debit_account_code="A", credit_account_code="B", amount=-5)
        assert entry.amount == Decimal("-5")

    def test_entry_is_frozen(self):
        """Test entries cannot be mutated."""
        entry = JournalEntry(debit_account_code="A", credit_account_code="B", amount=1)
        with pytest.raises(ValidationError):
            entry.amount = Decimal("2")

    def test_self_referencing_flag(self):
        """Test is_self_referencing."""
        entry = JournalEntry(debit_account_code="A", credit_account_code="A", amount=1)
        assert entry.is_self_referencing is True

    def test_coerce_passes_entries_through(self):
        """Test coerce returns an existing entry unchanged."""
        entry = JournalEntry(debit_account_code="A", credit_account_code="B", amount=1)
        assert JournalEntry.coerce(entry) is entry

    def test_coerce_boolean_amount(self):
        """Test a boolean amount is an amount error."""
        with pytest.raises(InvalidAmountError) as excinfo:
            JournalEntry.coerce(
                {"debit_account_code": "A", "credit_account_code": "B", "amount": True},
                index=3,
            )
        assert excinfo.value.entry_index == 3

    def test_coerce_rejects_other_types(self):
        """Test non-mapping input is malformed."""
        with pytest.raises(InvalidEntryError):
            JournalEntry.coerce("1100,3000,5", index=0)


class TestAccountTypes:
    """Tests for account types and classification."""

    def test_all_types_exist(self):
        """Test that the five fundamental types exist."""
        for name in ["asset", "liability", "equity", "income", "expense"]:
            assert AccountType(name) is not None

    def test_normal_balance(self):
        """Test debit-normal and credit-normal types."""
        assert AccountType.ASSET.normal_balance is NormalBalance.DEBIT
        assert AccountType.EXPENSE.normal_balance is NormalBalance.DEBIT
        assert AccountType.LIABILITY.normal_balance is NormalBalance.CREDIT
        assert AccountType.EQUITY.normal_balance is NormalBalance.CREDIT
        assert AccountType.INCOME.normal_balance is NormalBalance.CREDIT

    def test_normalize_classification(self):
        """Test string values and integer keys are normalized."""
        normalized = normalize_classification({1100: "Asset", "4000": AccountType.INCOME})
        assert normalized == {"1100": AccountType.ASSET, "4000": AccountType.INCOME}

    def test_normalize_classification_rejects_unknown(self):
        """Test unknown types raise InvalidClassificationError."""
        with pytest.raises(InvalidClassificationError):
            normalize_classification({"1100": "cash"})

    def test_account_balance_model(self):
        """Test AccountBalance holds a signed decimal."""
        balance = AccountBalance(account_code="3000", balance=Decimal("-1000"))
        assert balance.balance < 0


class TestChartOfAccounts:
    """Tests for the chart of accounts."""

    @pytest.fixture
    def chart(self) -> ChartOfAccounts:
        return ChartOfAccounts.from_records([
            {"code": "1100", "name": "Kas", "type": "asset"},
            {"code": "2000", "name": "Biaya Operasional", "type": "expense"},
            {"code": "3000", "name": "Modal", "type": "equity"},
            {"code": "4000", "name": "Penjualan", "type": "income"},
        ])

    def test_account_types(self, chart):
        """Test the chart yields a classification mapping."""
        assert chart.account_types()["3000"] is AccountType.EQUITY
        assert len(chart.account_types()) == 4

    def test_name_for(self, chart):
        """Test name lookup, empty for unknown codes."""
        assert chart.name_for("1100") == "Kas"
        assert chart.name_for("9999") == ""

    def test_membership(self, chart):
        """Test len and in."""
        assert len(chart) == 4
        assert "4000" in chart
        assert "9999" not in chart

    def test_duplicate_codes_rejected(self):
        """Test a chart cannot list one code twice."""
        with pytest.raises(ValueError, match="Duplicate account code"):
            ChartOfAccounts(accounts=(
                AccountInfo(code="1100", name="Kas", type=AccountType.ASSET),
                AccountInfo(code="1100", name="Bank", type=AccountType.ASSET),
            ))


class TestResultModels:
    """Tests for engine result models."""

    def test_totals_balanced(self):
        """Test JournalTotals.is_balanced."""
        assert JournalTotals(total_debit=Decimal("5"), total_credit=Decimal("5.00")).is_balanced
        assert not JournalTotals(total_debit=Decimal("5"), total_credit=Decimal("4")).is_balanced

    def test_equation_result_sides(self):
        """Test derived sides of the equation."""
        result = EquationResult(
            assets=Decimal("1600"),
            liabilities=Decimal("0"),
            equity=Decimal("1000"),
            income=Decimal("800"),
            expenses=Decimal("200"),
        )
        assert result.net_income == Decimal("600")
        assert result.right_side == Decimal("1600")
        assert result.holds is True
        assert result.is_complete is True

    def test_equation_result_difference(self):
        """Test a failing equation reports its difference."""
        result = EquationResult(assets=Decimal("10"), equity=Decimal("7"))
        assert result.holds is False
        assert result.difference == Decimal("3")

    def test_equation_result_is_exact(self):
        """Test long decimals compare without rounding."""
        big = Decimal("1" * 40 + ".000001")
        bigger = Decimal("1" * 39 + "2.000001")
        result = EquationResult(assets=bigger, equity=big, income=Decimal("1"))
        assert result.holds is True

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            entries_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_amount",
                    message="Amount must not be negative",
                    severity="error",
                    entry_index=0,
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.is_valid is False

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            entries_valid=True,
            issues=[
                ValidationIssue(
                    field="account_types",
                    issue_type="unclassified_account",
                    message="Account '9999' has no classification",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_validation_issue_severity_pattern(self):
        """Test severity must be error, warning or info."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ENTRIES_RECEIVED,
            description="Received 3 journal entries",
        )
        assert event.event_type == AuditEventType.ENTRIES_RECEIVED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.balances_computed(account_count=4, correlation_id=uuid4())
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "balances_computed"
        assert log_dict["details"]["account_count"] == 4

    def test_builder_journal_unbalanced(self):
        """Test an unbalanced journal is an error event."""
        event = AuditEventBuilder.journal_checked(
            total_debit="10", total_credit="9", is_balanced=False, correlation_id=uuid4()
        )
        assert event.event_type == AuditEventType.JOURNAL_UNBALANCED
        assert event.severity == AuditSeverity.ERROR

    def test_builder_equation_checked(self):
        """Test equation events carry both sides as strings."""
        correlation_id = uuid4()
        event = AuditEventBuilder.equation_checked(
            holds=True, left_side="1600", right_side="1600", correlation_id=correlation_id
        )
        assert event.event_type == AuditEventType.EQUATION_HELD
        assert event.correlation_id == correlation_id
        assert event.details["assets"] == "1600"

    def test_builder_system_error(self):
        """System errors carry the exception type as their code."""
        event = AuditEventBuilder.system_error(
            error_type="RuntimeError",
            error_message="validator crashed",
            correlation_id=uuid4(),
        )
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.error_code == "RuntimeError"

    def test_builder_entry_rejected(self):
        """Test rejected entries record the error code."""
        event = AuditEventBuilder.entry_rejected(
            error_code="InvalidAmountError",
            error_message="Amount must not be negative, got -5",
            entry_index=2,
            correlation_id=uuid4(),
        )
        assert event.error_code == "InvalidAmountError"
        assert event.details["entry_index"] == 2
        assert "entry 2" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

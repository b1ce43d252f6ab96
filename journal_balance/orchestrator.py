"""
Verification Orchestrator

Ties validation, the balance engine, the ledger build and the audit
trail into one verification run:

1. Receive entries (and optionally a classification or chart)
2. Validate both stages; stop on the first error
3. Totals check
4. Per-account balances
5. Accounting equation (when classified)
6. Ledger rows (when a chart is given)

DESIGN DECISION: The orchestrator adds auditing and reporting only.
Every number in a LedgerReport comes from the engine functions, so a
report can never disagree with calling them directly.

Entries are validated once per run, by the flow's own validator. The
engine steps then work on the validated list. Failures other than a
JournalError are audited as system errors and re-raised.
"""

from collections.abc import Iterable
from typing import Any, Optional
from uuid import UUID

from journal_balance.audit import AuditLogger, create_correlation_id
from journal_balance.config import DisplaySettings, LedgerSettings, get_settings
from journal_balance.engine import (
    accumulate_balances,
    classify_balances,
    ledger_rows,
    sum_journal,
)
from journal_balance.errors import JournalError
from journal_balance.formatting import format_amount
from journal_balance.models.chart import ChartOfAccounts
from journal_balance.models.journal import AccountClassification
from journal_balance.models.report import LedgerReport
from journal_balance.storage import InMemoryAuditStorage
from journal_balance.validation import EntryValidator


class LedgerVerificationFlow:
    """
    Orchestrates one verification run over a journal.

    Invalid input is audited and then re-raised as its typed error;
    the flow never returns a report built from rejected entries.
    """

    def __init__(
        self,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
        display: Optional[DisplaySettings] = None,
    ):
        if settings is None:
            settings = validator.settings if validator else get_settings().ledger
        self._settings = settings
        self._validator = validator or EntryValidator(settings)
        self._audit_logger = audit_logger
        self._display = display

    def run(
        self,
        entries: Iterable[Any],
        account_types: Optional[AccountClassification] = None,
        chart: Optional[ChartOfAccounts] = None,
        strict: Optional[bool] = None,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerReport:
        """
        Verify a journal end to end.

        Args:
            entries: Journal entries or raw entry records
            account_types: Classification for the equation check.
                          Taken from `chart` when omitted.
            chart: Chart of accounts for ledger rows
            strict: Fail on unclassified accounts (default from settings)
            correlation_id: Groups this run's audit events

        Raises:
            JournalError: the first validation or arithmetic error
        """
        correlation_id = correlation_id or create_correlation_id()
        entries = list(entries)
        if account_types is None and chart is not None:
            account_types = chart.account_types()

        if self._audit_logger:
            self._audit_logger.log_entries_received(len(entries), correlation_id)

        try:
            validation, valid, errors = self._validator.check(
                entries, account_types, strict
            )
            if errors:
                raise errors[0]

            tolerated = [
                issue.entry_index
                for issue in validation.issues
                if issue.issue_type == "self_referencing" and issue.severity == "warning"
            ]
            if tolerated and self._audit_logger:
                self._audit_logger.log_self_referencing_tolerated(tolerated, correlation_id)

            totals = sum_journal(valid, self._settings)
            if self._audit_logger:
                self._audit_logger.log_journal_checked(totals, correlation_id)

            balances = accumulate_balances(valid, self._settings)
            if self._audit_logger:
                self._audit_logger.log_balances_computed(len(balances), correlation_id)

            equation = None
            if account_types is not None:
                equation = classify_balances(
                    balances, account_types, strict=strict, settings=self._settings
                )
                if self._audit_logger:
                    self._audit_logger.log_equation_checked(equation, correlation_id)

            ledger = []
            if chart is not None:
                ledger = ledger_rows(valid, chart, self._settings)
                if self._audit_logger:
                    self._audit_logger.log_ledger_built(len(ledger), correlation_id)

        except JournalError as e:
            if self._audit_logger:
                self._audit_logger.log_entry_rejected(e, correlation_id)
            raise
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        return LedgerReport(
            correlation_id=correlation_id,
            totals=totals,
            balances=dict(balances),
            equation=equation,
            ledger=ledger,
            validation=validation,
        )

    def summarize(self, report: LedgerReport) -> str:
        """
        Plain-text summary of a report, with amounts formatted for display.
        """
        display = self._display or get_settings().display

        def money(value) -> str:
            return format_amount(value, display)

        totals = report.totals
        status = "balanced" if report.is_balanced else "NOT balanced"
        lines = [
            f"Journal: {totals.entry_count} entries, {status} "
            f"(debit {money(totals.total_debit)} / credit {money(totals.total_credit)})",
            f"Accounts referenced: {len(report.balances)}",
        ]

        equation = report.equation
        if equation is not None:
            verdict = "holds" if equation.holds else "FAILS"
            lines.append(
                f"Accounting equation {verdict}: assets {money(equation.left_side)}"
                f" vs liabilities + equity + net income {money(equation.right_side)}"
            )
            if not equation.holds:
                lines.append(f"  Difference: {money(equation.difference)}")
            if equation.unclassified_accounts:
                lines.append(
                    "  Excluded (unclassified): "
                    + ", ".join(equation.unclassified_accounts)
                )

        if report.ledger:
            lines.append("")
            lines.append("Ledger:")
            for row in report.ledger:
                account_type = row.account_type.value if row.account_type else "-"
                lines.append(
                    f"  {row.code:<8} {row.name:<28} {account_type:<10} {money(row.balance):>18}"
                )

        if report.validation.warnings:
            lines.append("")
            lines.append("Warnings:")
            for warning in report.validation.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)


def create_verification_flow(
    with_storage: bool = True,
) -> LedgerVerificationFlow:
    """
    Factory function for a verification flow with auditing.

    Args:
        with_storage: Keep audit events in memory as well as logging them.
                     Set to False for log-only auditing.
    """
    storage = InMemoryAuditStorage() if with_storage else None
    return LedgerVerificationFlow(audit_logger=AuditLogger(storage))

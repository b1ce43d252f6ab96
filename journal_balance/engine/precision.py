"""
Exact decimal arithmetic for ledger sums.

Sums run inside a local decimal context that traps Inexact, so a total
that would need rounding raises PrecisionError instead of drifting.

Given the amounts being summed, sum_precision() sizes the context so
that no sum or difference of those amounts can need rounding. Validated
journals therefore never raise PrecisionError; the trap stays as the
guard for arithmetic on values the context was not sized for.
"""

from collections.abc import Iterable
from contextlib import contextmanager
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    localcontext,
)
from typing import Iterator, Optional

from journal_balance.config import LedgerSettings, get_settings
from journal_balance.errors import PrecisionError


def sum_precision(
    amounts: Iterable[Decimal],
    settings: Optional[LedgerSettings] = None,
) -> int:
    """
    Significant digits needed to add or subtract every amount exactly.

    Integer digits of the largest amount, plus decimal places of the
    finest one, plus one digit per power of ten in the amount count.
    Never less than the configured decimal_precision.
    """
    settings = settings or get_settings().ledger
    amounts = list(amounts)
    if not amounts:
        return settings.decimal_precision

    integer_digits = max(max(amount.adjusted() + 1, 1) for amount in amounts)
    fraction_digits = max(max(-amount.as_tuple().exponent, 0) for amount in amounts)
    headroom = len(str(len(amounts)))
    return max(
        settings.decimal_precision,
        integer_digits + fraction_digits + headroom,
    )


def ledger_context(
    settings: Optional[LedgerSettings] = None,
    precision: Optional[int] = None,
) -> Context:
    settings = settings or get_settings().ledger
    return Context(
        prec=precision or settings.decimal_precision,
        rounding=ROUND_HALF_EVEN,
        traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
    )


@contextmanager
def exact_arithmetic(
    settings: Optional[LedgerSettings] = None,
    amounts: Optional[Iterable[Decimal]] = None,
) -> Iterator[Context]:
    """
    Run the enclosed block under the ledger's exact decimal context.

    Args:
        settings: Ledger policy. Loaded from the environment if None.
        amounts: The amounts the block will combine. When given, the
                 context is widened to hold any sum of them exactly.

    Raises:
        PrecisionError: if any operation in the block had to round
    """
    precision = sum_precision(amounts, settings) if amounts is not None else None
    context = ledger_context(settings, precision)
    try:
        with localcontext(context) as ctx:
            yield ctx
    except Inexact as e:
        raise PrecisionError(
            f"Sum exceeds {context.prec} significant digits and would be rounded"
        ) from e

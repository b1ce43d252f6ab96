"""
Amount formatting for summaries.

Display only: formatted strings never feed back into computation.
"""

from decimal import MAX_PREC, ROUND_HALF_UP, Context, Decimal
from typing import Optional, Union

from journal_balance.config import DisplaySettings, get_settings
from journal_balance.errors import InvalidAmountError


_DISPLAY_CONTEXT = Context(prec=MAX_PREC, rounding=ROUND_HALF_UP)


def _group_thousands(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_amount(
    amount: Union[Decimal, int, str],
    settings: Optional[DisplaySettings] = None,
) -> str:
    """
    Render an amount in the display currency.

    With the default Rupiah settings:
        format_amount(Decimal("1300"))   -> "Rp 1.300"
        format_amount(Decimal("-500.5")) -> "-Rp 501"
    """
    settings = settings or get_settings().display

    value = Decimal(amount)
    if not value.is_finite():
        raise InvalidAmountError(f"Cannot format non-finite amount {value}", amount=amount)

    quantum = Decimal(1).scaleb(-settings.decimal_places)
    value = value.quantize(quantum, context=_DISPLAY_CONTEXT)

    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):f}".partition(".")

    text = _group_thousands(integer, settings.thousands_separator)
    if settings.decimal_places:
        text = f"{text}{settings.decimal_separator}{fraction}"

    return f"{sign}{settings.currency_symbol} {text}"

"""
Display Formatting

Amounts are shown the Indonesian Rupiah way by default:

    Decimal("1500000")  ->  "Rp 1.500.000,00"

Symbol, separators and precision come from AppSettings.

IMPORTANT: parse_amount() is for turning what the user typed back into a
number. It is permissive about symbols and spacing and it does NOT
validate. The ledger enforces amount > 0 itself.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from money_tracker.config import AppSettings, get_settings


def _resolve(settings: Optional[AppSettings]) -> AppSettings:
    return settings if settings is not None else get_settings().app


def format_amount(
    amount: Decimal | float | int,
    settings: Optional[AppSettings] = None,
) -> str:
    """
    Format an amount for display.

    Negative amounts (a negative balance) get a leading minus:
    "-Rp 2.500,00".
    """
    settings = _resolve(settings)
    places = settings.decimal_places

    value = Decimal(str(amount)).quantize(
        Decimal(1).scaleb(-places),
        rounding=ROUND_HALF_UP,
    )
    sign = "-" if value < 0 else ""

    # Format with "," groups and "." decimals, then swap in the
    # configured separators through placeholders.
    body = f"{abs(value):,.{places}f}"
    body = (
        body.replace(",", "\0")
        .replace(".", "\1")
        .replace("\0", settings.thousands_separator)
        .replace("\1", settings.decimal_separator)
    )

    if settings.currency_symbol:
        return f"{sign}{settings.currency_symbol} {body}"
    return f"{sign}{body}"


def parse_amount(
    text: str,
    settings: Optional[AppSettings] = None,
) -> Decimal:
    """
    Parse a displayed or typed amount back to a Decimal.

    Anything that isn't a digit, a minus sign or one of the configured
    separators is dropped, so "Rp 1.500.000,00" and "1500000" both parse.

    Raises:
        ValueError: If no number can be recovered from text
    """
    settings = _resolve(settings)

    kept = "".join(
        ch for ch in text
        if ch.isdigit()
        or ch == "-"
        or ch in (settings.thousands_separator, settings.decimal_separator)
    )
    normalized = (
        kept.replace(settings.thousands_separator, "")
        .replace(settings.decimal_separator, ".")
    )

    if not any(ch.isdigit() for ch in normalized):
        raise ValueError(f"No amount in {text!r}")
    try:
        return Decimal(normalized)
    except InvalidOperation:
        raise ValueError(f"Cannot parse amount from {text!r}")

"""Amount parsing utilities.

User input is parsed into Decimal and rounded to whole cents before it is
compared or sent anywhere; float never touches money.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

# Currency symbols, thousands separators and inner whitespace
_NOISE = re.compile(r"[$€£¥￥,\s]")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Accepts "12.5", "¥12.50", "1,234.56", "-12" and accounting-style
    negatives like "(12.50)".

    Args:
        amount_str: Amount as typed by the user

    Returns:
        Decimal amount, not yet rounded

    Raises:
        ValueError: If the text is empty, unparsable or not a finite number
    """
    text = "" if amount_str is None else str(amount_str).strip()
    if not text:
        raise ValueError("Empty amount string")

    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = _NOISE.sub("", text)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return -amount if negative else amount


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount half-up to whole cents.

    Raises:
        ValueError: If the amount has too many digits to be held in cents
    """
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount {amount} is too large")


def to_cents(amount: Decimal) -> int:
    """Convert an amount to integer minor units."""
    return int(quantize_amount(amount) * 100)


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two fraction digits."""
    return f"{quantize_amount(amount):.2f}"

# offer_model/utils/formatting.py
"""Display helpers for rupee amounts and percentages."""

from decimal import ROUND_HALF_UP, Decimal

RUPEE = "₹"
LAKH = 100_000


def _group_indian(digits: str) -> str:
    """Group an integer digit string the Indian way: 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: float, decimals: int = 0, symbol: str = RUPEE) -> str:
    """
    Format an amount as en-IN currency, e.g. 4037500 -> '₹40,37,500'.

    Rounds half away from zero to ``decimals`` places.
    """
    quantum = Decimal(1).scaleb(-decimals)
    amount = Decimal(str(abs(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    whole, _, fraction = f"{amount:f}".partition(".")
    text = symbol + _group_indian(whole)
    if fraction:
        text += "." + fraction
    if value < 0 and amount != 0:
        text = "-" + text
    return text


def format_lakhs(value: float, symbol: str = RUPEE) -> str:
    """Axis label in lakhs, e.g. 2500000 -> '₹25L'."""
    return f"{symbol}{value / LAKH:g}L"


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"

"""
Display formatting in Indian numbering (12,34,567) with a rupee sign.

Formatting never raises: non-finite values render as "N/A".
"""

import math

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    """Group an unsigned integer string: last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_number(num: float, decimals: int = 0) -> str:
    """12345678.9 -> '1,23,45,679' (decimals=0)."""
    try:
        if not math.isfinite(num):
            return "N/A"
        text = f"{abs(num):.{decimals}f}"
        whole, _, frac = text.partition(".")
        sign = "-" if num < 0 and float(text) != 0 else ""
        grouped = _group_indian(whole)
        return f"{sign}{grouped}.{frac}" if frac else f"{sign}{grouped}"
    except (TypeError, ValueError):
        return "N/A"


def format_currency(amount: float) -> str:
    """Whole rupees. Negative amounts put the sign after the symbol: ₹-1,000."""
    try:
        if amount == 0:
            return f"{RUPEE}0.00"
        if not math.isfinite(amount):
            return "N/A"
        formatted = format_number(abs(amount), 0)
        return f"{RUPEE}{'-' if amount < 0 else ''}{formatted}"
    except TypeError:
        return "N/A"


def format_percentage(num: float, decimals: int = 1) -> str:
    try:
        if not math.isfinite(num):
            return "N/A"
        return f"{num:.{decimals}f}%"
    except (TypeError, ValueError):
        return "N/A"


def format_compact_number(num: float) -> str:
    """Crore / lakh / thousand abbreviations for large positive amounts."""
    try:
        if not math.isfinite(num):
            return "N/A"
        if num >= 10_000_000:
            return f"{RUPEE}{num / 10_000_000:.1f}Cr"
        if num >= 100_000:
            return f"{RUPEE}{num / 100_000:.1f}L"
        if num >= 1000:
            return f"{RUPEE}{num / 1000:.1f}K"
        return format_currency(num)
    except TypeError:
        return "N/A"

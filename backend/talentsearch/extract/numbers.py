"""
Numeric extraction from human-entered candidate fields.

Experience is typed by recruiters in many shapes ("2.5 years",
"2 years 6 months", "30 months", "3+"), and salaries carry currency
symbols and Indian digit grouping ("₹12,00,000"). Both parsers are total:
they never raise, and fall back to 0 (experience) or None (currency).
"""

import re
from typing import Optional

_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_DECIMAL = re.compile(r"\d+\.\d+")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def _to_float(s: str) -> Optional[float]:
    try:
        return float(s)
    except ValueError:
        return None


def parse_experience(text: Optional[str]) -> float:
    """Return experience in decimal years, or 0.0 when nothing is extractable."""
    if not text or not text.strip():
        return 0.0
    cleaned = text.strip().lower()
    numbers = _NUMBER.findall(cleaned)
    if not numbers:
        return 0.0

    # A lone decimal ("2.5 years", "4.5") is taken as years outright.
    if len(numbers) == 1 and _DECIMAL.search(cleaned):
        years = _to_float(_NON_NUMERIC.sub("", cleaned))
        if years is not None:
            return years

    has_year = "year" in cleaned
    has_month = "month" in cleaned
    first = float(numbers[0])

    if has_year and has_month:
        months = float(numbers[1]) if len(numbers) > 1 else 0.0
        return first + months / 12.0
    if has_month:
        return first / 12.0
    return first


def parse_currency(text: Optional[str]) -> Optional[float]:
    """Return the amount in a currency string, or None when it is absent."""
    if not text:
        return None
    digits = _NON_NUMERIC.sub("", text)
    if not digits:
        return None
    return _to_float(digits)

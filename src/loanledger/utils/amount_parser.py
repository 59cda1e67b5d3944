"""Amount and rate parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

# Currency symbols and codes accepted in front of or behind an amount
_CURRENCY = re.compile(r"^(?:PHP|USD|[$€£¥₱])\s*|\s*(?:PHP|USD)$", re.IGNORECASE)


def _to_decimal(value: str) -> Decimal:
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{value}'")
    if not number.is_finite():
        raise ValueError(f"Could not parse amount '{value}'")
    return number


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money amount into a Decimal rounded to cents.

    Handles:
    - "1500", "1500.5"
    - "₱1,500.50", "PHP 1500", "1500 PHP"
    - "-250.00"

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    cleaned = str(amount_str).strip()
    negative = cleaned.startswith("-")
    if negative:
        cleaned = cleaned[1:].lstrip()
    cleaned = _CURRENCY.sub("", cleaned).replace(",", "").strip()

    amount = _to_decimal(cleaned).quantize(CENT, rounding=ROUND_HALF_UP)
    return -amount if negative else amount


def parse_rate(rate_str: str) -> Decimal:
    """Parse a deduction rate; "2%" and "0.02" both mean two percent.

    Raises:
        ValueError: If rate string cannot be parsed
    """
    if rate_str is None or not str(rate_str).strip():
        raise ValueError("Empty rate string")

    cleaned = str(rate_str).strip()
    if cleaned.endswith("%"):
        return _to_decimal(cleaned[:-1].strip()) / Decimal("100")
    return _to_decimal(cleaned)

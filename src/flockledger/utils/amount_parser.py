"""Amount and quantity parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_CURRENCY = re.compile(r"(?i)^(rs\.?|pkr|\$)\s*|\s*(rs\.?|pkr)$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles:
    - "1250.50"
    - "1,250.50"
    - "Rs 1,250", "Rs. 1250", "PKR 1250", "$1250"
    - "-500" and "(500)" for negative amounts

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1].strip()

    text = _CURRENCY.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount


def parse_count(count_str: str) -> int:
    """Parse a whole number such as a bird or crate count ("1,200" -> 1200).

    Raises:
        ValueError: If the string is not a whole number
    """
    text = (count_str or "").strip().replace(",", "")
    if not re.fullmatch(r"-?\d+", text):
        raise ValueError(f"Could not parse count '{count_str}'")
    return int(text)

import re
from decimal import Decimal, InvalidOperation

# Digits with optional thousands commas and up to two decimals. The whole
# token must match, so "1,234.567" is rejected rather than clipped.
_NUMBER = r"(?<!\d)(?<!\d[.,])(\d[\d,]*(?:\.\d{1,2})?)(?![.,]?\d)"
# Textual markers must not be the tail of a longer word ("hours 5").
_CURRENCY_BEFORE = r"(?:(?<![a-z])rs\.?|(?<![a-z])inr|₹)"
_CURRENCY_AFTER = r"(?:rs(?![a-z])\.?|inr(?![a-z])|₹)"

AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(_CURRENCY_BEFORE + r"\s*" + _NUMBER, re.IGNORECASE),
    re.compile(_NUMBER + r"\s*" + _CURRENCY_AFTER, re.IGNORECASE),
    re.compile(
        r"(?<![a-z])(?:amount|amt)[\s:]*(?:" + _CURRENCY_BEFORE + r")?\s*" + _NUMBER,
        re.IGNORECASE,
    ),
)

_CENTS = Decimal("0.01")


def parse_amount_token(token: str) -> Decimal | None:
    """Turn a matched number like '2,500.50' into a positive Decimal."""
    cleaned = token.replace(",", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value.quantize(_CENTS)


def extract_amount(text: str) -> Decimal | None:
    """
    Return the transaction amount from an SMS body.

    Patterns are tried in priority order and the first one yielding a positive
    number wins, so the transaction amount is preferred over a trailing
    available-balance figure only because banks usually print it first.
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = parse_amount_token(match.group(1))
        if amount is not None:
            return amount
    return None

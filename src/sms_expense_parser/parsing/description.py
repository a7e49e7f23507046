import re

DEFAULT_DESCRIPTION = "SMS Transaction"

FALLBACK_KEYWORDS = frozenset({"debited", "credited", "spent", "paid"})

_CAPTURE = r"([a-z0-9\s&.-]+?)"
_HAS_WORD = re.compile(r"[a-z0-9]", re.IGNORECASE)
_STOP = r"(?=\s+on\b|\s+using\b|\s*\.|$)"

DESCRIPTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:at|to)\s+" + _CAPTURE + _STOP, re.IGNORECASE),
    re.compile(r"\b(?:merchant|payee)[\s:]+" + _CAPTURE + _STOP, re.IGNORECASE),
    re.compile(r"\b(?:purchase|payment)[\s:]+" + _CAPTURE + _STOP, re.IGNORECASE),
)


def match_description(text: str) -> str | None:
    for pattern in DESCRIPTION_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = match.group(1).strip()
        if _HAS_WORD.search(value):
            return value
    return None


def words_after_keyword(text: str, max_words: int = 3) -> str | None:
    """Up to `max_words` tokens following the first debited/credited/spent/paid."""
    words = text.split()
    for index, word in enumerate(words):
        if word.lower() in FALLBACK_KEYWORDS:
            if index < len(words) - 2:
                return " ".join(words[index + 1:index + 1 + max_words])
            return None
    return None


def extract_description(text: str) -> str:
    return match_description(text) or words_after_keyword(text) or DEFAULT_DESCRIPTION

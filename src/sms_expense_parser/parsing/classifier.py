from enum import Enum

KNOWN_SENDERS = (
    "hdfc",
    "icici",
    "sbi",
    "axis",
    "kotak",
    "paytm",
    "gpay",
    "phonepe",
    "bharatpe",
)

TRANSACTION_KEYWORDS = (
    "debited",
    "credited",
    "spent",
    "paid",
    "transaction",
    "purchase",
    "debit",
    "credit",
)


class ClassificationPolicy(str, Enum):
    ANY = "any"  # known sender OR transaction keyword
    ALL = "all"  # known sender AND transaction keyword


def is_known_sender(sender_id: str) -> bool:
    sender = sender_id.lower()
    return any(bank in sender for bank in KNOWN_SENDERS)


def has_transaction_keyword(body: str) -> bool:
    text = body.lower()
    return any(keyword in text for keyword in TRANSACTION_KEYWORDS)


def is_transaction_sms(
    sender_id: str,
    body: str,
    policy: ClassificationPolicy = ClassificationPolicy.ANY,
) -> bool:
    """Decide whether a message looks like a bank or wallet transaction alert."""
    from_bank = is_known_sender(sender_id)
    has_keyword = has_transaction_keyword(body)
    if policy == ClassificationPolicy.ALL:
        return from_bank and has_keyword
    return from_bank or has_keyword

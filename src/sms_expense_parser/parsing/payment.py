import re

from sms_expense_parser.models import PaymentMethod

DEFAULT_PAYMENT_METHOD = PaymentMethod.DIGITAL_WALLET

PAYMENT_METHOD_CUES: tuple[tuple[PaymentMethod, tuple[str, ...]], ...] = (
    (PaymentMethod.CREDIT_CARD, ("credit card", "cc")),
    (PaymentMethod.DEBIT_CARD, ("debit card", "dc")),
    (PaymentMethod.DIGITAL_WALLET, ("upi", "gpay", "phonepe", "paytm")),
    (PaymentMethod.BANK_TRANSFER, ("neft", "imps", "rtgs")),
)


def _cue_pattern(cues: tuple[str, ...]) -> re.Pattern[str]:
    # Whole words only: "account" must not read as "cc".
    alternatives = "|".join(re.escape(cue) for cue in cues)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


_COMPILED_CUES = tuple((method, _cue_pattern(cues)) for method, cues in PAYMENT_METHOD_CUES)


def infer_payment_method(text: str) -> PaymentMethod:
    for method, pattern in _COMPILED_CUES:
        if pattern.search(text):
            return method
    # Most mobile transaction alerts are UPI/wallet based.
    return DEFAULT_PAYMENT_METHOD

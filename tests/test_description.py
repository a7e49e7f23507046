from samples import AMAZON_SMS, DOMINOS_SMS, PETROL_SMS

from sms_expense_parser.parsing.description import (
    DEFAULT_DESCRIPTION,
    extract_description,
    match_description,
    words_after_keyword,
)


def test_merchant_after_at_keeps_original_case() -> None:
    assert extract_description(PETROL_SMS) == "RELIANCE PETROL PUMP"


def test_description_stops_at_period() -> None:
    assert extract_description(DOMINOS_SMS) == "DOMINOS PIZZA via Paytm"
    assert extract_description(AMAZON_SMS) == "Amazon Pay for shopping"


def test_merchant_label() -> None:
    assert match_description("Txn alert. Merchant: BIG BAZAAR using card xx12") == "BIG BAZAAR"


def test_purchase_label() -> None:
    assert match_description("Purchase: NETFLIX.COM") == "NETFLIX"


def test_fallback_words_after_keyword() -> None:
    body = "Rs 500 debited from a/c xx1234"
    assert match_description(body) is None
    assert extract_description(body) == "from a/c xx1234"


def test_fallback_ignores_keyword_near_end() -> None:
    assert words_after_keyword("Amount 500 debited") is None
    assert words_after_keyword("500 debited now") is None
    assert extract_description("Amount 500 debited") == DEFAULT_DESCRIPTION


def test_fallback_literal() -> None:
    assert extract_description("hello there") == DEFAULT_DESCRIPTION


def test_punctuation_only_capture_is_ignored() -> None:
    assert match_description("debited Rs 500 at . on x") is None
    assert extract_description("debited Rs 500 at . on x") == "Rs 500 at"

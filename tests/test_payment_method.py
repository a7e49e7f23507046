import pytest
from samples import AMAZON_SMS, DOMINOS_SMS, PETROL_SMS

from sms_expense_parser.models import PaymentMethod
from sms_expense_parser.parsing.payment import infer_payment_method


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (PETROL_SMS, PaymentMethod.DIGITAL_WALLET),
        (DOMINOS_SMS, PaymentMethod.DIGITAL_WALLET),
        (AMAZON_SMS, PaymentMethod.DIGITAL_WALLET),
        ("Spent Rs 500 on your Credit Card xx1234", PaymentMethod.CREDIT_CARD),
        ("Rs 500 spent on HDFC CC ending 4321", PaymentMethod.CREDIT_CARD),
        ("Rs 200 spent using SBI Debit Card 4321", PaymentMethod.DEBIT_CARD),
        ("Rs 200 spent using DC 4321", PaymentMethod.DEBIT_CARD),
        ("Rs 10,000 transferred via NEFT", PaymentMethod.BANK_TRANSFER),
        ("IMPS of Rs 300 received", PaymentMethod.BANK_TRANSFER),
        ("UPI payment towards credit card bill", PaymentMethod.CREDIT_CARD),
        ("Rs 500 debited", PaymentMethod.DIGITAL_WALLET),
    ],
)
def test_infer_payment_method(body: str, expected: PaymentMethod) -> None:
    assert infer_payment_method(body) == expected


def test_account_does_not_read_as_credit_card() -> None:
    assert infer_payment_method("debited from account 1234") == PaymentMethod.DIGITAL_WALLET

from datetime import datetime, timedelta, timezone

from sms_expense_parser.domain.dates import to_timestamp_ms
from sms_expense_parser.models import RawMessage
from sms_expense_parser.sources.base import MessageSource, PermissionStatus

_SAMPLES = (
    (
        "HDFCBK",
        "Rs 2,500 debited from your account ending 1234 for payment at RELIANCE PETROL PUMP "
        "on 05-Jan-25. Available balance: Rs 45,230.50",
        1,
    ),
    (
        "PAYTM",
        "Rs 150 paid to DOMINOS PIZZA via Paytm. Transaction ID: 12345678. Cashback of Rs 15 credited.",
        2,
    ),
    (
        "ICICIBK",
        "UPI payment of Rs 89 made to Amazon Pay for shopping. Transaction ID: 987654321",
        3,
    ),
)


class DemoMessageSource(MessageSource):
    """Three canned bank alerts, one, two and three days old."""

    name = "demo"

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now

    def request_permissions(self) -> PermissionStatus:
        return PermissionStatus(sms=True, contacts=True)

    def read_messages(self, limit: int = 100) -> list[RawMessage]:
        now = self.now or datetime.now(timezone.utc)
        messages = [
            RawMessage(
                sender_id=sender,
                body=body,
                timestamp_ms=to_timestamp_ms(now - timedelta(days=days_ago)),
            )
            for sender, body, days_ago in _SAMPLES
        ]
        return messages[:max(limit, 0)]

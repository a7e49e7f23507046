from datetime import date, datetime, timedelta, timezone

from samples import DAY_MS, JAN_5_2025_MS

from sms_expense_parser.domain.dates import (
    format_duration,
    is_recent,
    to_timestamp_ms,
    to_transaction_date,
)


def test_transaction_date_uses_utc_day_boundaries() -> None:
    midnight = 1736035200000  # 2025-01-05T00:00:00Z
    assert to_transaction_date(midnight) == date(2025, 1, 5)
    assert to_transaction_date(midnight - 1) == date(2025, 1, 4)
    assert to_transaction_date(midnight + DAY_MS - 1) == date(2025, 1, 5)


def test_timestamp_round_trip_for_naive_datetime() -> None:
    assert to_timestamp_ms(datetime(2025, 1, 5, 10, 0)) == JAN_5_2025_MS


def test_is_recent() -> None:
    now = datetime(2025, 1, 5, 10, 0, tzinfo=timezone.utc)
    assert is_recent(JAN_5_2025_MS - 29 * DAY_MS, now, 30)
    assert not is_recent(to_timestamp_ms(now - timedelta(days=30)), now, 30)


def test_format_duration() -> None:
    assert format_duration(0) == "0 ms"
    assert format_duration(0.0125) == "12.5 ms"
    assert format_duration(2.5) == "2.50 s"
    assert format_duration(90) == "1.50 min"

from datetime import date, datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_transaction_date(timestamp_ms: int) -> date:
    """UTC calendar date of an epoch-milliseconds timestamp."""
    return (_EPOCH + timedelta(milliseconds=timestamp_ms)).date()


def to_timestamp_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int((moment - _EPOCH) / timedelta(milliseconds=1))


def is_recent(timestamp_ms: int, now: datetime, days: int) -> bool:
    cutoff = to_timestamp_ms(now) - days * 24 * 60 * 60 * 1000
    return timestamp_ms > cutoff


def format_duration(seconds: float) -> str:
    if seconds <= 0:
        return "0 ms"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    if seconds < 60:
        return f"{seconds:.2f} s"
    return f"{seconds / 60:.2f} min"

from datetime import datetime, time, timezone


def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(dt: datetime) -> datetime:
    """Normalise to naive UTC; naive input is taken to already be UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def utc_naive_to_aware(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc)


def start_of_today(now: datetime | None = None) -> datetime:
    """Midnight (naive UTC) of the day containing `now`."""
    current = to_utc_naive(now) if now is not None else utc_now_naive()
    return datetime.combine(current.date(), time.min)

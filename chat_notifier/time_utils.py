from datetime import datetime, timedelta, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_datetime(value) -> Optional[datetime]:
    """Convert a Firestore timestamp to an aware datetime, or None if absent"""
    if value is None:
        return None
    # DatetimeWithNanoseconds is a datetime subclass
    if not isinstance(value, datetime):
        if hasattr(value, 'datetime'):
            value = value.datetime
        elif hasattr(value, 'to_datetime'):
            value = value.to_datetime()
        else:
            raise TypeError(f"Unsupported timestamp value: {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def is_away(last_active, threshold_seconds: int, now: Optional[datetime] = None) -> bool:
    """
    Check whether a user has been inactive for longer than the threshold.

    A missing lastActive counts as the epoch, so users who never reported
    activity are always away.
    """
    now = now or datetime.now(timezone.utc)
    last_active_at = to_datetime(last_active) or EPOCH
    return last_active_at < now - timedelta(seconds=threshold_seconds)

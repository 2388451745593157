# utils/time_utils.py
from datetime import date, datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


def utc_today() -> date:
    # quota days roll over at the UTC date boundary
    return utcnow().date()

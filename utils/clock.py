# utils/clock.py
import datetime


def utcnow() -> datetime.datetime:
    # naive UTC, what the DateTime columns store
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)

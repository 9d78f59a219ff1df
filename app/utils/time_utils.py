"""
Time helpers shared by models and services
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (DateTime columns store UTC)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_isoformat(value: Optional[datetime]) -> Optional[str]:
    """Render a UTC datetime as ISO-8601 with a trailing Z"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"

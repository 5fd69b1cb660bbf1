# File: common/utils/date_utils.py

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Returns current UTC time as aware datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Returns current UTC time as an ISO-8601 string, the stored timestamp format."""
    return utc_now().isoformat()

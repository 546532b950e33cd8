from __future__ import annotations

from datetime import datetime

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def now_local() -> datetime:
    """Return the current local wall-clock time (backups are named by it)."""
    return datetime.now()


def backup_timestamp(dt: datetime) -> str:
    """Format dt as YYYYMMDD-HHmmss (second resolution)."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    return dt.strftime(BACKUP_TIMESTAMP_FORMAT)

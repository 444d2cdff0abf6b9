"""
Utilidades de fechas. En base de datos todas las fechas se guardan en UTC sin tzinfo.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Instante actual en UTC, naive (sin tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normaliza un datetime aware a UTC naive. Los naive se asumen ya en UTC.
    """
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

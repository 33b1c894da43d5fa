"""
Helpers de data/hora em UTC
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Agora em UTC (timezone-aware)"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normaliza um datetime para UTC timezone-aware.

    SQLite devolve colunas DateTime(timezone=True) sem tzinfo; esses valores
    já estão em UTC e recebem tzinfo=UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

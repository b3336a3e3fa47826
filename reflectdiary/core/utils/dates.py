"""Timestamp conversions shared by the API and the client."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC; the database stores naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """Render a naive UTC datetime as ``2024-05-01T09:30:00.000Z``."""
    if value is None:
        return None
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp (``Z`` suffix accepted) into a naive UTC datetime."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(text))

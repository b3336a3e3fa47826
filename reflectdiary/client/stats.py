"""Dashboard statistics over entry dicts as returned by the API."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from reflectdiary.core.utils.dates import parse_timestamp


def _created(entry: Dict[str, Any]) -> datetime:
    return parse_timestamp(entry["createdAt"])


def total_words(entries: Iterable[Dict[str, Any]]) -> int:
    return sum(len((entry.get("content") or "").split()) for entry in entries)


def days_since_first(entries: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> int:
    """Whole days since the earliest entry, counting its day as day one."""
    stamps = [_created(e) for e in entries]
    if not stamps:
        return 0
    now = now or datetime.utcnow()
    return (now - min(stamps)) // timedelta(days=1) + 1


def longest_streak(entries: Iterable[Dict[str, Any]]) -> int:
    """Longest run of consecutive UTC days with at least one entry."""
    days: List[date] = sorted({_created(e).date() for e in entries})
    if not days:
        return 0
    best = current = 1
    for prev, day in zip(days, days[1:]):
        if day - prev == timedelta(days=1):
            current += 1
            best = max(best, current)
        else:
            current = 1
    return best


def dashboard_stats(entries: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> Dict[str, int]:
    items = list(entries)
    return {
        "totalEntries": len(items),
        "totalWords": total_words(items),
        "daysSinceFirst": days_since_first(items, now),
        "longestStreak": longest_streak(items),
    }

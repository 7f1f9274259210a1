from __future__ import annotations

from datetime import datetime, timezone

UTC = timezone.utc


def parse_utc(s: str) -> datetime:
    """Parse '2024-03-11 10:00:00' as a UTC instant."""
    return datetime.strptime(s, "%Y-%m-%d %H:%M:%S").replace(tzinfo=UTC)


def format_utc(dt: datetime) -> str:
    return dt.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S")

"""Wall-clock ``HH:MM`` strings as minutes since midnight."""

from __future__ import annotations

from typing import Optional


def parse_clock_minutes(value: Optional[str]) -> int:
    """Return minutes since midnight for a 24-hour ``HH:MM`` string.

    Empty input means midnight (0), so callers that need to tell "missing"
    apart from "00:00" must check for presence first. Only the first two
    segments are read and no range check is made: ``"25:99"`` gives 1599.
    Raises ``ValueError`` when there are fewer than two numeric segments.
    """
    if not value:
        return 0
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid clock string: {value!r}")
    hours, minutes = parts[0].strip(), parts[1].strip()
    if not (hours.isdigit() and minutes.isdigit()):
        raise ValueError(f"Invalid clock string: {value!r}")
    return int(hours) * 60 + int(minutes)


def format_clock_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_clock(value: Optional[str]) -> bool:
    if not value:
        return False
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return False
    return 0 <= int(parts[0]) <= 23 and 0 <= int(parts[1]) <= 59

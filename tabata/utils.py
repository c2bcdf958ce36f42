"""Small formatting helpers shared by the UI."""

from __future__ import annotations


def format_duration(duration_ms: int | float) -> str:
    """``MM:SS.mmm`` for a millisecond duration, e.g. ``01:01.001``."""
    duration_ms = int(max(0, duration_ms))
    minutes, rest = divmod(duration_ms, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_seconds(duration_ms: int) -> str:
    """Whole seconds with a suffix, for stage list rows: ``30s``."""
    return f"{max(0, duration_ms) // 1000}s"

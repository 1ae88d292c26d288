from __future__ import annotations


def format_time(seconds: int) -> str:
    """HH:MM:SS, e.g. 3661 -> 01:01:01."""
    seconds = max(0, int(seconds))
    hrs, rem = divmod(seconds, 3600)
    mins, secs = divmod(rem, 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """Short duration, e.g. '1h 23m' or '45m'."""
    seconds = max(0, int(seconds))
    hours, rem = divmod(seconds, 3600)
    minutes = rem // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"

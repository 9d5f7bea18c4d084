from __future__ import annotations


def estimated_reading_time(word_count: int, wpm: int) -> float:
    """Seconds needed to read ``word_count`` words at ``wpm``."""
    if wpm <= 0:
        return 0.0
    return word_count / wpm * 60.0


def format_duration(seconds: float) -> str:
    """Render a duration as ``H:MM:SS``, ``M:SS`` or ``0:SS``."""
    total = int(max(0.0, seconds))
    hours = total // 3600
    minutes = total // 60 % 60
    secs = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    if minutes > 0:
        return f"{minutes}:{secs:02d}"
    return f"0:{secs:02d}"


def format_word_count(count: int) -> str:
    return f"{count:,}"

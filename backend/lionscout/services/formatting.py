"""
Display helpers shared by the video analytics views
"""
import math
from typing import Optional


def completion_percent(watch_seconds: Optional[float], total_seconds: Optional[float]) -> int:
    """Percentage of the video watched in one session, clamped to 0-100.

    Unknown, zero or non-finite durations count as 0% rather than propagating NaN.
    """
    if not total_seconds or not math.isfinite(total_seconds) or total_seconds <= 0:
        return 0
    if not watch_seconds or math.isnan(watch_seconds) or watch_seconds <= 0:
        return 0
    if math.isinf(watch_seconds):
        return 100
    # Half-up rounding to match the percentages shown on player cards
    percent = math.floor(100 * watch_seconds / total_seconds + 0.5)
    return max(0, min(100, percent))


def format_watch_time(seconds: Optional[float]) -> str:
    """Format seconds as 45s, 2m 5s, 1h 5m"""
    if not seconds or not math.isfinite(seconds) or seconds < 0:
        seconds = 0
    # Round once so 119.7 reads as 2m, never 1m 60s
    seconds = int(math.floor(seconds + 0.5))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        mins, secs = divmod(seconds, 60)
        return f"{mins}m {secs}s" if secs else f"{mins}m"
    hours, rest = divmod(seconds, 3600)
    mins = rest // 60
    return f"{hours}h {mins}m" if mins else f"{hours}h"


def format_view_count(count: int) -> str:
    """Abbreviate view counts: 999, 1.2K, 3.4M"""
    if count < 1000:
        return str(count)
    if count < 1000000:
        return f"{count / 1000:.1f}K"
    return f"{count / 1000000:.1f}M"

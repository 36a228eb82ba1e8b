"""
Time Formatting

Parsing and formatting of race/rep durations expressed as
"SS.f", "M:SS.f" or "H:MM:SS.f".
"""

import math
from typing import Optional

PLACEHOLDER = "—"


def parse_duration(text: Optional[str]) -> Optional[float]:
    """
    Parse a duration string into seconds.

    Accepts "59.3", "1:45.5", "14:30" and "1:02:03.4". The rightmost
    segment is seconds (may be fractional), the others are integers.

    Args:
        text: Duration string

    Returns:
        Seconds as float, or None if the text is empty or malformed
    """
    if text is None:
        return None

    parts = str(text).strip().split(":")
    if not parts[0] or len(parts) > 3:
        return None

    try:
        seconds = float(parts[-1])
        whole = [int(p) for p in parts[:-1]]
    except ValueError:
        return None

    if not math.isfinite(seconds) or seconds < 0 or any(v < 0 for v in whole):
        return None

    # Right-to-left significance: seconds, minutes, hours
    total = seconds
    for multiplier, value in zip((60, 3600), reversed(whole)):
        total += value * multiplier
    return total


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as M:SS.t (under an hour) or H:MM:SS.t"""
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return PLACEHOLDER

    tenths = math.floor(seconds * 10 + 0.5)  # halves round up
    hours, rest = divmod(tenths, 36000)
    minutes, rest = divmod(rest, 600)
    secs = f"{rest // 10:02d}.{rest % 10}"

    if hours:
        return f"{hours}:{minutes:02d}:{secs}"
    return f"{minutes}:{secs}"

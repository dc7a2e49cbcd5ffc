import re
from typing import Optional

from DayLog.models import TimeToken

# 7, 7pm, 7:30, 7:30 am, 19:05 ...
TIME_RE = re.compile(
    r"""
    \b
    (?P<hour>\d{1,2})
    (?::(?P<minute>\d{2}))?
    \s*
    (?P<meridiem>am|pm)?
    \b
    """,
    re.ASCII | re.IGNORECASE | re.VERBOSE,
)

# Hours assumed to be morning when no meridiem is written.
MORNING_HOURS = range(7, 12)


def find_time(text: str) -> Optional[re.Match]:
    """Return the first (left-most) time-like match in `text`, or None."""
    return TIME_RE.search(text)


def normalize_time(hour: int, minute: Optional[int] = None, meridiem: Optional[str] = None) -> TimeToken:
    """
    Normalize a raw (hour, minute, meridiem) triple to the 12-hour clock.

    The meridiem is inferred *before* hour 0 is rewritten to 12, so a bare
    "0:15" becomes 12:15 PM, not AM. Hours above 12 are treated as 24-hour
    input: reduced by 12 and forced to PM.
    """
    minute = minute or 0
    meridiem = (meridiem or "").upper()
    if not meridiem:
        meridiem = "AM" if hour in MORNING_HOURS else "PM"
    if hour == 0:
        hour = 12
    if hour > 12:
        hour -= 12
        meridiem = "PM"
    return TimeToken(hour=hour, minute=minute, meridiem=meridiem)


def token_from_match(match: re.Match) -> TimeToken:
    minute = match.group("minute")
    return normalize_time(
        int(match.group("hour")),
        int(minute) if minute is not None else None,
        match.group("meridiem"),
    )


def normalize_time_text(text: str) -> Optional[str]:
    """Find the first time in `text` and return its canonical form ("7:30 AM")."""
    match = find_time(text)
    if not match:
        return None
    return str(token_from_match(match))

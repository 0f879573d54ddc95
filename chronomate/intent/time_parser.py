"""Resolve natural-language time fragments to absolute datetimes."""

import re
from datetime import datetime, timedelta

_NUMBER = re.compile(r"\d+")
_MINUTES = re.compile(r"\bminutes?\b", re.IGNORECASE)
_HOURS = re.compile(r"\bhours?\b", re.IGNORECASE)
_DAYS = re.compile(r"\bdays?\b", re.IGNORECASE)
_TOMORROW = re.compile(r"tomorrow", re.IGNORECASE)
_CLOCK = re.compile(r"(\d{1,2}):?(\d{2})?\s?(am|pm)?", re.IGNORECASE)

TOMORROW_HOUR = 9


def _first_number(fragment: str, default: int) -> int:
    match = _NUMBER.search(fragment)
    return int(match.group(0)) if match else default


def resolve_time(fragment: str | None, now: datetime | None = None) -> datetime:
    """
    Resolve a time fragment against a reference instant.

    Rules are tried in order and the first one that applies wins:
    ``N minutes``, ``N hours``, ``N days``, ``tomorrow`` (09:00 next day),
    a clock time such as ``5 pm`` or ``14:30`` (rolled to the next day when
    already past), and finally now + 1 minute.

    Args:
        fragment: Raw matched text, e.g. "in 10 minutes" or "at 3 pm".
        now: Reference instant. Defaults to the current local time.

    Returns:
        The resolved datetime. Never raises.
    """
    now = now or datetime.now()
    text = (fragment or "").strip()

    try:
        return _resolve(text, now)
    except (OverflowError, ValueError):
        # Amounts too large for datetime (or for int parsing) land here.
        return now + timedelta(minutes=1)


def _resolve(text: str, now: datetime) -> datetime:
    if _MINUTES.search(text):
        return now + timedelta(minutes=_first_number(text, 5))

    if _HOURS.search(text):
        return now + timedelta(hours=_first_number(text, 1))

    if _DAYS.search(text):
        return now + timedelta(days=_first_number(text, 1))

    if _TOMORROW.search(text):
        tomorrow = now + timedelta(days=1)
        return tomorrow.replace(hour=TOMORROW_HOUR, minute=0, second=0, microsecond=0)

    match = _CLOCK.search(text)
    if match:
        return _next_clock_time(match, now)

    return now + timedelta(minutes=1)


def _next_clock_time(match: re.Match, now: datetime) -> datetime:
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").lower()

    if meridiem == "pm" and hour != 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0

    # Out-of-range values carry into the following day instead of raising.
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    scheduled = midnight + timedelta(hours=hour, minutes=minute)

    if scheduled <= now:
        scheduled += timedelta(days=1)
    return scheduled

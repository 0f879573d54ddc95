"""Keyword scans for time fragments, priority and recurrence."""

import re

from chronomate.intent.models import Priority, RepeatKind, RepeatSpec

TIME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"(?:at |by |around )?(\d{1,2}):?(\d{2})?\s?(am|pm)", re.IGNORECASE),
    re.compile(r"(tomorrow|today|tonight|morning|afternoon|evening)", re.IGNORECASE),
    re.compile(r"(monday|tuesday|wednesday|thursday|friday|saturday|sunday)", re.IGNORECASE),
    re.compile(r"in (\d+) (minutes?|hours?|days?)", re.IGNORECASE),
)

# Checked in order: "urgent" beats "low priority" when both appear.
HIGH_PRIORITY_KEYWORDS = ("urgent", "important", "critical")
LOW_PRIORITY_KEYWORDS = ("low priority", "when possible")

_REPEAT_KEYWORDS: tuple[tuple[re.Pattern, RepeatKind], ...] = (
    (re.compile(r"daily|every day", re.IGNORECASE), RepeatKind.DAILY),
    (re.compile(r"weekly|every week", re.IGNORECASE), RepeatKind.WEEKLY),
    (re.compile(r"monthly|every month", re.IGNORECASE), RepeatKind.MONTHLY),
)
_REPEAT_INTERVAL = re.compile(r"every (\d+) (minutes?|hours?|days?|weeks?)", re.IGNORECASE)
_INTERVAL_UNITS = {
    "minute": RepeatKind.MINUTES,
    "hour": RepeatKind.HOURS,
    "day": RepeatKind.DAILY,
    "week": RepeatKind.WEEKLY,
}


def extract_time_fragment(message: str) -> str | None:
    """Return the first substring that looks like a time expression."""
    for pattern in TIME_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(0)
    return None


def extract_priority(message: str) -> Priority:
    """Infer priority from keywords; medium when nothing matches."""
    lower = message.lower()
    if any(word in lower for word in HIGH_PRIORITY_KEYWORDS):
        return Priority.HIGH
    if any(word in lower for word in LOW_PRIORITY_KEYWORDS):
        return Priority.LOW
    return Priority.MEDIUM


def extract_repeat(message: str) -> RepeatSpec | None:
    """Infer a recurrence cadence, or None when the message has none."""
    for pattern, kind in _REPEAT_KEYWORDS:
        if pattern.search(message):
            return RepeatSpec(kind=kind)

    match = _REPEAT_INTERVAL.search(message)
    if match:
        interval = max(int(match.group(1)), 1)
        unit = match.group(2).lower().rstrip("s")
        return RepeatSpec(kind=_INTERVAL_UNITS[unit], interval=interval)

    return None

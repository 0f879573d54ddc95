"""Rule-based intent extraction.

The pattern table is plain data: an ordered sequence of ``IntentPattern``
entries. Groups are tried reminder -> task -> schedule and the first pattern
that matches decides the intent; nothing matching yields ``General``.
"""

import re
from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from chronomate.intent.classifiers import (
    extract_priority,
    extract_repeat,
    extract_time_fragment,
)
from chronomate.intent.models import (
    ActionKind,
    CreateReminder,
    CreateTask,
    General,
    Intent,
    ScheduleEvent,
)

_REMINDER_TAIL = r"(?:\s+(?:at|by|around|every|daily|weekly|monthly)|$)"


@dataclass(frozen=True)
class IntentPattern:
    """One phrasing: the intent it produces and the regex that detects it.

    Group 1 is the content/title. For schedule phrasings an optional group 2
    is the time fragment.
    """

    kind: ActionKind
    regex: re.Pattern

    @classmethod
    def compile(cls, kind: ActionKind, pattern: str) -> "IntentPattern":
        return cls(kind=kind, regex=re.compile(pattern, re.IGNORECASE))


DEFAULT_PATTERNS: tuple[IntentPattern, ...] = (
    IntentPattern.compile(ActionKind.CREATE_REMINDER, rf"remind me to (.+?){_REMINDER_TAIL}"),
    IntentPattern.compile(ActionKind.CREATE_REMINDER, rf"set (?:a )?reminder (?:to )?(.+?){_REMINDER_TAIL}"),
    IntentPattern.compile(ActionKind.CREATE_REMINDER, rf"don't let me forget (?:to )?(.+?){_REMINDER_TAIL}"),
    IntentPattern.compile(ActionKind.CREATE_TASK, r"add (.+?) to (?:my )?(?:todo|task|to-do) (?:list)?"),
    IntentPattern.compile(ActionKind.CREATE_TASK, r"create (?:a )?task (?:to )?(.+)"),
    IntentPattern.compile(ActionKind.CREATE_TASK, r"i need to (.+?)(?:\s+(?:today|tomorrow|this week)|$)"),
    IntentPattern.compile(ActionKind.SCHEDULE_EVENT, r"schedule (.+?) (?:for|at|on) (.+)"),
    IntentPattern.compile(ActionKind.SCHEDULE_EVENT, r"book (.+?) (?:for|at|on) (.+)"),
    IntentPattern.compile(ActionKind.SCHEDULE_EVENT, r"add (.+?) to (?:my )?calendar"),
)

_GROUP_ORDER = (ActionKind.CREATE_REMINDER, ActionKind.CREATE_TASK, ActionKind.SCHEDULE_EVENT)


class IntentExtractor:
    """Classify an utterance against an ordered pattern table."""

    def __init__(self, patterns: Sequence[IntentPattern] = DEFAULT_PATTERNS):
        self.patterns = tuple(patterns)

    def extract(self, message: str) -> Intent:
        """Return the intent of the first matching pattern, or General."""
        for group in _GROUP_ORDER:
            for pattern in self.patterns:
                if pattern.kind != group:
                    continue
                match = pattern.regex.search(message)
                if match:
                    intent = self._build(pattern.kind, match, message)
                    logger.debug(f"Matched {pattern.kind.value} via {pattern.regex.pattern!r}")
                    return intent

        return General(content=message)

    @staticmethod
    def _build(kind: ActionKind, match: re.Match, message: str) -> Intent:
        content = match.group(1).strip()
        priority = extract_priority(message)

        if kind == ActionKind.CREATE_REMINDER:
            return CreateReminder(
                content=content,
                time=extract_time_fragment(message),
                priority=priority,
                repeat=extract_repeat(message),
            )

        if kind == ActionKind.CREATE_TASK:
            return CreateTask(
                content=content,
                time=extract_time_fragment(message),
                priority=priority,
            )

        if kind == ActionKind.SCHEDULE_EVENT:
            time = match.group(2) if match.re.groups >= 2 else None
            return ScheduleEvent(
                title=content,
                time=(time.strip() if time else None) or extract_time_fragment(message),
                priority=priority,
            )

        raise ValueError(f"Patterns cannot produce {kind.value} intents")


_default_extractor = IntentExtractor()


def extract_intent(message: str) -> Intent:
    """Extract an intent with the default pattern table."""
    return _default_extractor.extract(message)

"""Intent extraction: patterns, keyword classifiers and time resolution."""

from chronomate.intent.classifiers import extract_priority, extract_repeat, extract_time_fragment
from chronomate.intent.extractor import DEFAULT_PATTERNS, IntentExtractor, IntentPattern, extract_intent
from chronomate.intent.models import (
    Action,
    ActionKind,
    CreateReminder,
    CreateTask,
    General,
    Intent,
    Priority,
    RepeatKind,
    RepeatSpec,
    ScheduleEvent,
)
from chronomate.intent.time_parser import resolve_time

__all__ = [
    "Action",
    "ActionKind",
    "CreateReminder",
    "CreateTask",
    "DEFAULT_PATTERNS",
    "General",
    "Intent",
    "IntentExtractor",
    "IntentPattern",
    "Priority",
    "RepeatKind",
    "RepeatSpec",
    "ScheduleEvent",
    "extract_intent",
    "extract_priority",
    "extract_repeat",
    "extract_time_fragment",
    "resolve_time",
]

"""Intent and action models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class Priority(str, Enum):
    """Priority of a reminder, task or event."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RepeatKind(str, Enum):
    """Recurrence cadence."""
    NONE = "none"
    MINUTES = "minutes"
    HOURS = "hours"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ActionKind(str, Enum):
    """Store operations an action can request."""
    CREATE_REMINDER = "create_reminder"
    CREATE_TASK = "create_task"
    SCHEDULE_EVENT = "schedule_event"
    UPDATE_MOOD = "update_mood"


@dataclass(frozen=True)
class RepeatSpec:
    """A recurrence: a cadence plus how many units between occurrences."""

    kind: RepeatKind = RepeatKind.NONE
    interval: int = 1

    @property
    def is_none(self) -> bool:
        return self.kind == RepeatKind.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialise in the shape the store keeps on reminders."""
        return {"type": self.kind.value, "interval": self.interval}

    def describe(self) -> str:
        """Human-readable cadence, e.g. ``daily`` or ``every 2 hours``."""
        if self.kind in (RepeatKind.MINUTES, RepeatKind.HOURS):
            unit = self.kind.value if self.interval != 1 else self.kind.value[:-1]
            return f"every {self.interval} {unit}"
        if self.interval == 1:
            return self.kind.value
        units = {RepeatKind.DAILY: "days", RepeatKind.WEEKLY: "weeks", RepeatKind.MONTHLY: "months"}
        return f"every {self.interval} {units[self.kind]}"


@dataclass(frozen=True)
class CreateReminder:
    kind: ClassVar[ActionKind] = ActionKind.CREATE_REMINDER

    content: str
    time: str | None = None
    priority: Priority = Priority.MEDIUM
    repeat: RepeatSpec | None = None


@dataclass(frozen=True)
class CreateTask:
    kind: ClassVar[ActionKind] = ActionKind.CREATE_TASK

    content: str
    time: str | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class ScheduleEvent:
    kind: ClassVar[ActionKind] = ActionKind.SCHEDULE_EVENT

    title: str
    time: str | None = None  # only None for phrasings without a time
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class General:
    kind: ClassVar[str] = "general"

    content: str


Intent = CreateReminder | CreateTask | ScheduleEvent | General


@dataclass
class Action:
    """A structured store instruction derived from an intent."""

    kind: ActionKind
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "data": dict(self.data)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Action":
        """Build an action from a backend reply entry.

        Accepts either ``kind`` or ``type`` as the tag. Raises ValueError on
        unknown kinds or a non-mapping payload.
        """
        tag = data.get("kind") or data.get("type")
        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            raise ValueError(f"Action data must be an object, got {type(payload).__name__}")
        return cls(kind=ActionKind(tag), data=dict(payload))

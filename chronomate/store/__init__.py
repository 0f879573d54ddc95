"""Local store for tasks, events and reminders, plus the action executor."""

from chronomate.store.executor import ActionExecutor, ActionResult
from chronomate.store.service import ChronoStore
from chronomate.store.types import CalendarEvent, Reminder, Task, UserData

__all__ = [
    "ActionExecutor",
    "ActionResult",
    "CalendarEvent",
    "ChronoStore",
    "Reminder",
    "Task",
    "UserData",
]

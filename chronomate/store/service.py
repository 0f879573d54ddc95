"""Local JSON store for tasks, events, reminders and user data."""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from chronomate.errors import ActionError
from chronomate.intent.models import Priority
from chronomate.store.types import (
    CalendarEvent,
    Habit,
    MoodEntry,
    Reminder,
    StoreData,
    Task,
    UserData,
)

MOOD_RETENTION_DAYS = 30

_PRIORITY_ORDER = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class ChronoStore:
    """
    Single-file store. The whole document is loaded lazily on first access
    and rewritten after every mutation.
    """

    def __init__(self, store_path: Path):
        self.store_path = store_path
        self._data: StoreData | None = None

    @classmethod
    def in_dir(cls, data_dir: Path) -> "ChronoStore":
        return cls(data_dir / "store.json")

    def _load(self) -> StoreData:
        """Load the store from disk."""
        if self._data is not None:
            return self._data

        if self.store_path.exists():
            try:
                data = json.loads(self.store_path.read_text(encoding="utf-8"))
                self._data = StoreData.model_validate(data)
            except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
                logger.warning(f"Failed to load store {self.store_path}, starting empty: {e}")
                self._data = StoreData()
        else:
            self._data = StoreData()

        return self._data

    def _save(self) -> None:
        """Save the store to disk."""
        if self._data is None:
            return

        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.store_path.write_text(
                json.dumps(self._data.to_json_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to write store {self.store_path}: {e}")
            raise

    @staticmethod
    def _build(model: type, **fields: Any):
        try:
            return model(**fields)
        except ValidationError as e:
            raise ActionError(f"Invalid {model.__name__.lower()}: {e}") from e

    @staticmethod
    def _apply(record, updates: dict[str, Any]):
        try:
            return record.model_validate({**record.model_dump(), **updates})
        except ValidationError as e:
            raise ActionError(f"Invalid update for {record.id}: {e}") from e

    # ========== Tasks ==========

    def create_task(self, title: str, **fields: Any) -> Task:
        store = self._load()
        task = self._build(Task, title=title, **fields)
        store.tasks.append(task)
        self._save()
        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def get_tasks(
        self,
        completed: bool | None = None,
        category: str | None = None,
        due_today: bool = False,
        now: datetime | None = None,
    ) -> list[Task]:
        """List tasks, highest priority first, then by due date, then by creation."""
        tasks = list(self._load().tasks)

        if completed is not None:
            tasks = [t for t in tasks if t.completed == completed]
        if category:
            tasks = [t for t in tasks if t.category == category]
        if due_today:
            today = (now or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)
            tomorrow = today + timedelta(days=1)
            tasks = [t for t in tasks if t.due_date and today <= t.due_date < tomorrow]

        def sort_key(t: Task):
            due = t.due_date or datetime.max
            return (-_PRIORITY_ORDER[t.priority], due, t.created_at)

        return sorted(tasks, key=sort_key)

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._load().tasks if t.id == task_id), None)

    def update_task(self, task_id: str, **updates: Any) -> Task | None:
        store = self._load()
        for i, task in enumerate(store.tasks):
            if task.id != task_id:
                continue
            newly_completed = bool(updates.get("completed")) and not task.completed
            if newly_completed:
                updates["completed_at"] = datetime.now()
            store.tasks[i] = self._apply(task, updates)
            if newly_completed:
                store.user.analytics.tasks_completed += 1
            self._save()
            return store.tasks[i]
        return None

    def delete_task(self, task_id: str) -> bool:
        store = self._load()
        before = len(store.tasks)
        store.tasks = [t for t in store.tasks if t.id != task_id]
        if len(store.tasks) < before:
            self._save()
            return True
        return False

    # ========== Events ==========

    def create_event(self, title: str, start: datetime, end: datetime, **fields: Any) -> CalendarEvent:
        store = self._load()
        event = self._build(CalendarEvent, title=title, start=start, end=end, **fields)
        store.events.append(event)
        self._save()
        logger.info(f"Created event {event.id}: {event.title} @ {event.start}")
        return event

    def get_events(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        category: str | None = None,
    ) -> list[CalendarEvent]:
        """List events by start time; ``start``/``end`` filter only when both are given."""
        events = list(self._load().events)
        if start and end:
            events = [e for e in events if start <= e.start <= end]
        if category:
            events = [e for e in events if e.category == category]
        return sorted(events, key=lambda e: e.start)

    def update_event(self, event_id: str, **updates: Any) -> CalendarEvent | None:
        store = self._load()
        for i, event in enumerate(store.events):
            if event.id == event_id:
                store.events[i] = self._apply(event, updates)
                self._save()
                return store.events[i]
        return None

    def delete_event(self, event_id: str) -> bool:
        store = self._load()
        before = len(store.events)
        store.events = [e for e in store.events if e.id != event_id]
        if len(store.events) < before:
            self._save()
            return True
        return False

    # ========== Reminders ==========

    def create_reminder(self, title: str, scheduled_time: datetime, **fields: Any) -> Reminder:
        store = self._load()
        reminder = self._build(Reminder, title=title, scheduled_time=scheduled_time, **fields)
        store.reminders.append(reminder)
        self._save()
        logger.info(f"Created reminder {reminder.id}: {reminder.title} @ {reminder.scheduled_time}")
        return reminder

    def get_reminders(self, completed: bool | None = None, category: str | None = None) -> list[Reminder]:
        reminders = list(self._load().reminders)
        if completed is not None:
            reminders = [r for r in reminders if r.completed == completed]
        if category:
            reminders = [r for r in reminders if r.category == category]
        return sorted(reminders, key=lambda r: r.scheduled_time)

    def update_reminder(self, reminder_id: str, **updates: Any) -> Reminder | None:
        store = self._load()
        for i, reminder in enumerate(store.reminders):
            if reminder.id == reminder_id:
                store.reminders[i] = self._apply(reminder, updates)
                self._save()
                return store.reminders[i]
        return None

    def snooze_reminder(self, reminder_id: str, minutes: int, now: datetime | None = None) -> bool:
        until = (now or datetime.now()) + timedelta(minutes=minutes)
        updated = self.update_reminder(reminder_id, snoozed=True, snooze_until=until)
        if updated:
            logger.debug(f"Reminder {reminder_id} snoozed until {until}")
        return updated is not None

    def get_due_reminders(self, now: datetime | None = None) -> list[Reminder]:
        """Open reminders whose time has come. Query only; delivery is external."""
        now = now or datetime.now()
        return [
            r for r in self.get_reminders(completed=False)
            if not r.snoozed and r.scheduled_time <= now
        ]

    # ========== User data ==========

    def get_user_data(self) -> UserData:
        return self._load().user.model_copy(deep=True)

    def update_user_data(self, **updates: Any) -> UserData:
        store = self._load()
        try:
            store.user = UserData.model_validate({**store.user.model_dump(), **updates})
        except ValidationError as e:
            raise ActionError(f"Invalid user data update: {e}") from e
        self._save()
        return store.user.model_copy(deep=True)

    def update_mood(self, mood: str, notes: str | None = None, now: datetime | None = None) -> None:
        """Set the current mood and keep the last 30 days of mood history."""
        if not mood or not mood.strip():
            raise ActionError("Mood must not be empty")

        now = now or datetime.now()
        user = self._load().user
        user.mood.current = mood
        user.mood.history.append(MoodEntry(date=now, mood=mood, notes=notes))

        cutoff = now - timedelta(days=MOOD_RETENTION_DAYS)
        user.mood.history = [e for e in user.mood.history if e.date >= cutoff]
        self._save()
        logger.info(f"Mood updated to {mood}")

    def add_habit(self, name: str, frequency: str = "daily") -> Habit:
        user = self._load().user
        habit = self._build(Habit, name=name, frequency=frequency)
        user.habits.append(habit)
        self._save()
        return habit

    # ========== Insights ==========

    def get_productivity_insights(self, now: datetime | None = None) -> dict[str, int]:
        now = now or datetime.now()
        tasks = self._load().tasks
        week_ago = now - timedelta(days=7)

        recent = [t for t in tasks if t.created_at >= week_ago]
        recent_done = [t for t in recent if t.completed]
        rate = (len(recent_done) / len(recent)) * 100 if recent else 0

        return {
            "weekly_completion_rate": round(rate),
            "total_tasks": len(tasks),
            "completed_tasks": sum(1 for t in tasks if t.completed),
            "pending_tasks": sum(1 for t in tasks if not t.completed),
            "overdue_tasks": sum(
                1 for t in tasks if not t.completed and t.due_date and t.due_date < now
            ),
        }

"""Apply assistant actions to the local store."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from loguru import logger

from chronomate.errors import ActionError
from chronomate.intent.models import Action, ActionKind
from chronomate.intent.time_parser import resolve_time
from chronomate.store.service import ChronoStore
from chronomate.store.types import CATEGORY_COLORS

DEFAULT_REMINDER_DELAY = timedelta(seconds=60)
DEFAULT_EVENT_LENGTH = timedelta(hours=1)


@dataclass
class ActionResult:
    """Outcome of one action: the created record, or why the store refused it."""

    action: Action
    record: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ActionExecutor:
    """Resolve time fragments and run actions against a ChronoStore."""

    def __init__(self, store: ChronoStore):
        self.store = store

    def execute(self, actions: list[Action], now: datetime | None = None) -> list[ActionResult]:
        """
        Run every action in order.

        A rejected action is logged and reported in its result; the remaining
        actions still run.
        """
        now = now or datetime.now()
        results = []
        for action in actions:
            try:
                record = self._dispatch(action, now)
                results.append(ActionResult(action=action, record=record))
            except ActionError as e:
                kind = getattr(action.kind, "value", action.kind)
                logger.warning(f"Action {kind} rejected: {e}")
                results.append(ActionResult(action=action, error=str(e)))
        return results

    def _dispatch(self, action: Action, now: datetime):
        data = action.data
        if action.kind == ActionKind.CREATE_REMINDER:
            return self._create_reminder(data, now)
        if action.kind == ActionKind.CREATE_TASK:
            return self._create_task(data, now)
        if action.kind == ActionKind.SCHEDULE_EVENT:
            return self._schedule_event(data, now)
        if action.kind == ActionKind.UPDATE_MOOD:
            mood = data.get("mood")
            if not isinstance(mood, str):
                raise ActionError("update_mood requires a mood")
            self.store.update_mood(mood, data.get("notes"), now=now)
            return mood
        raise ActionError(f"Unknown action kind: {action.kind}")

    @staticmethod
    def _title(data: dict[str, Any]) -> str:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ActionError("Action is missing a title")
        return title.strip()

    @staticmethod
    def _optional(data: dict[str, Any], *keys: str) -> dict[str, Any]:
        return {k: data[k] for k in keys if data.get(k) is not None}

    def _create_reminder(self, data: dict[str, Any], now: datetime):
        time = data.get("time")
        scheduled = resolve_time(str(time), now) if time else now + DEFAULT_REMINDER_DELAY
        return self.store.create_reminder(
            title=self._title(data),
            scheduled_time=scheduled,
            **self._optional(data, "description", "priority", "category", "repeat"),
        )

    def _create_task(self, data: dict[str, Any], now: datetime):
        # Backend replies may use dueDate instead of time.
        time = data.get("time") or data.get("dueDate")
        fields = self._optional(data, "description", "priority", "category", "tags")
        if time:
            fields["due_date"] = resolve_time(str(time), now)
        return self.store.create_task(title=self._title(data), **fields)

    def _schedule_event(self, data: dict[str, Any], now: datetime):
        time = data.get("time")
        start = resolve_time(str(time) if time else None, now)
        category = data.get("category") or "personal"
        return self.store.create_event(
            title=self._title(data),
            start=start,
            end=start + DEFAULT_EVENT_LENGTH,
            category=category,
            color=CATEGORY_COLORS.get(category, CATEGORY_COLORS["other"]),
            **self._optional(data, "description", "priority"),
        )

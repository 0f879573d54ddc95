"""Store record types (Pydantic models with camelCase JSON aliases)."""

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from chronomate.intent.models import Priority


def _new_id() -> str:
    return str(uuid.uuid4())


class RepeatRule(BaseModel):
    """Recurrence stored on reminders and events."""

    type: Literal["minutes", "hours", "daily", "weekly", "monthly", "yearly"]
    interval: int = Field(1, ge=1)
    end_date: datetime | None = Field(None, alias="endDate")

    model_config = {"populate_by_name": True}


class Task(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str = Field(min_length=1)
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = Field(None, alias="dueDate")
    category: str = "general"
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    completed_at: datetime | None = Field(None, alias="completedAt")
    tags: list[str] = []

    model_config = {"populate_by_name": True}


EventCategory = Literal["work", "personal", "health", "social", "other"]

CATEGORY_COLORS: dict[str, str] = {
    "work": "#3b82f6",
    "personal": "#10b981",
    "health": "#f59e0b",
    "social": "#8b5cf6",
    "other": "#6b7280",
}


class CalendarEvent(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str = Field(min_length=1)
    description: str | None = None
    start: datetime
    end: datetime
    all_day: bool = Field(False, alias="allDay")
    category: EventCategory = "personal"
    color: str = CATEGORY_COLORS["personal"]
    priority: Priority = Priority.MEDIUM
    repeat: RepeatRule | None = None
    location: str | None = None
    attendees: list[str] = []

    model_config = {"populate_by_name": True}


class Reminder(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str = Field(min_length=1)
    description: str | None = None
    scheduled_time: datetime = Field(alias="scheduledTime")
    completed: bool = False
    snoozed: bool = False
    snooze_until: datetime | None = Field(None, alias="snoozeUntil")
    priority: Priority = Priority.MEDIUM
    category: str = "general"
    repeat: RepeatRule | None = None
    notification_method: Literal["popup", "sound", "voice", "all"] = Field("all", alias="notificationMethod")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")

    model_config = {"populate_by_name": True}


class Habit(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    frequency: Literal["daily", "weekly", "monthly"] = "daily"
    streak: int = 0
    last_completed: datetime | None = Field(None, alias="lastCompleted")

    model_config = {"populate_by_name": True}


class MoodEntry(BaseModel):
    date: datetime = Field(default_factory=datetime.now)
    mood: str
    notes: str | None = None


class MoodState(BaseModel):
    current: str = "neutral"
    history: list[MoodEntry] = []


class WorkingHours(BaseModel):
    start: str = "09:00"
    end: str = "17:00"
    days: list[str] = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class Preferences(BaseModel):
    theme: Literal["light", "dark", "auto"] = "auto"
    notifications: bool = True
    voice: bool = True
    reminder_tone: Literal["friendly", "professional", "playful"] = Field("friendly", alias="reminderTone")
    working_hours: WorkingHours = Field(default_factory=WorkingHours, alias="workingHours")

    model_config = {"populate_by_name": True}


class Analytics(BaseModel):
    tasks_completed: int = Field(0, alias="tasksCompleted")
    current_streak: int = Field(0, alias="currentStreak")
    longest_streak: int = Field(0, alias="longestStreak")
    most_productive_hour: int = Field(10, alias="mostProductiveHour")
    average_tasks_per_day: float = Field(0, alias="averageTasksPerDay")

    model_config = {"populate_by_name": True}


class UserData(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = "User"
    preferences: Preferences = Field(default_factory=Preferences)
    habits: list[Habit] = []
    mood: MoodState = Field(default_factory=MoodState)
    analytics: Analytics = Field(default_factory=Analytics)


class StoreData(BaseModel):
    """Everything the local store persists, written as one JSON document."""

    version: int = 1
    tasks: list[Task] = []
    events: list[CalendarEvent] = []
    reminders: list[Reminder] = []
    user: UserData = Field(default_factory=UserData)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

"""Per-session conversation state."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Literal

HISTORY_LIMIT = 20


class Mood(str, Enum):
    """User moods the assistant adapts its tone to."""
    HAPPY = "happy"
    SAD = "sad"
    STRESSED = "stressed"
    TIRED = "tired"
    NEUTRAL = "neutral"

    @classmethod
    def parse(cls, value: "str | Mood | None") -> "Mood":
        """Map a free-form mood string to a Mood; unknown values are neutral."""
        if isinstance(value, Mood):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NEUTRAL


@dataclass(frozen=True)
class HistoryEntry:
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


class ConversationHistory:
    """
    Append-only conversation log capped at ``limit`` entries.

    When full, the oldest entry is evicted first. Entries can only be appended
    or read back as a whole.
    """

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._entries: deque[HistoryEntry] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    def append(self, role: Literal["user", "assistant"], content: str) -> HistoryEntry:
        entry = HistoryEntry(role=role, content=content)
        self._entries.append(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """Return a copy of the history, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries())


@dataclass
class ConversationContext:
    """State the response composer reads; owned by the calling session."""

    user_id: str
    mood: Mood = Mood.NEUTRAL
    recent_tasks: list[str] = field(default_factory=list)
    habits: list[str] = field(default_factory=list)
    preferences: dict[str, Any] = field(default_factory=dict)
    history: ConversationHistory = field(default_factory=ConversationHistory)

    def add_to_history(self, role: Literal["user", "assistant"], content: str) -> None:
        self.history.append(role, content)

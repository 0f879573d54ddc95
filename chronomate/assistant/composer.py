"""Reply composition: generative backend with a templated fallback."""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from loguru import logger

from chronomate.assistant.context import ConversationContext, Mood
from chronomate.assistant.prompts import build_prompt
from chronomate.intent.models import (
    Action,
    CreateReminder,
    CreateTask,
    Intent,
    ScheduleEvent,
)
from chronomate.providers.base import TextCompleter


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Category(str, Enum):
    REMINDER = "reminder"
    TASK = "task"
    REFLECTION = "reflection"
    GENERAL = "general"
    EMOTIONAL_SUPPORT = "emotional_support"


@dataclass
class AIResponse:
    """One assistant turn: reply text plus the actions to run."""

    text: str
    actions: list[Action] = field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    category: Category = Category.GENERAL

    @property
    def has_actions(self) -> bool:
        return len(self.actions) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "actions": [a.to_dict() for a in self.actions],
            "sentiment": self.sentiment.value,
            "category": self.category.value,
        }


MOOD_PREFIXES: dict[Mood, str] = {
    Mood.HAPPY: "I love your energy! ✨ ",
    Mood.SAD: "I'm here for you. Let's take things one step at a time. 💙 ",
    Mood.STRESSED: "Take a deep breath. We'll organize this together. 🌸 ",
    Mood.TIRED: "You've been working hard. How about we schedule some rest? 😴 ",
    Mood.NEUTRAL: "",
}

MOOD_EMOJIS: dict[Mood, str] = {
    Mood.HAPPY: "😊",
    Mood.SAD: "💙",
    Mood.STRESSED: "🌸",
    Mood.TIRED: "😴",
    Mood.NEUTRAL: "🤗",
}

for _table in (MOOD_PREFIXES, MOOD_EMOJIS):
    _missing = set(Mood) - set(_table)
    if _missing:
        raise RuntimeError(f"Mood table is missing entries for: {sorted(m.value for m in _missing)}")

# (pattern, text, sentiment, category); first match wins.
CANNED_REPLIES: tuple[tuple[re.Pattern, str, Sentiment, Category], ...] = (
    (
        re.compile(r"how are you|\b(?:hello|hi|hey)\b", re.IGNORECASE),
        "Hello! I'm doing wonderful, thank you for asking! I'm here and ready to help you "
        "have an amazing day. How can I support you? 🤗",
        Sentiment.POSITIVE,
        Category.GENERAL,
    ),
    (
        re.compile(r"thank", re.IGNORECASE),
        "You're so welcome! It makes me happy to help you. Remember, I'm always here "
        "when you need me! 💫",
        Sentiment.POSITIVE,
        Category.GENERAL,
    ),
    (
        re.compile(r"stressed|overwhelmed", re.IGNORECASE),
        "I hear you, and that's completely valid. When we're overwhelmed, breaking things "
        "down helps. Want me to help you prioritize your tasks? Sometimes just getting "
        "everything out of your head and onto a list can bring such relief. 🌱",
        Sentiment.POSITIVE,
        Category.EMOTIONAL_SUPPORT,
    ),
)

DEFAULT_REPLY = (
    "I'm listening and here to help! Could you tell me more about what you'd like to "
    "work on today? I can help with reminders, tasks, scheduling, or just be here to chat. 💙"
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _when(fragment: str) -> str:
    """Phrase a time fragment for a confirmation sentence."""
    return f" at {fragment}" if fragment[:1].isdigit() else f" {fragment}"


def compose_templated(message: str, intent: Intent, actions: list[Action], context: ConversationContext) -> AIResponse:
    """Deterministic reply used when no backend is available or it fails."""
    prefix = MOOD_PREFIXES[context.mood]

    if isinstance(intent, CreateReminder):
        when = _when(intent.time) if intent.time else ""
        repeat = f" {intent.repeat.describe()}" if intent.repeat else ""
        return AIResponse(
            text=f"{prefix}Perfect! I'll remind you to {intent.content}{when}{repeat}. "
                 f"Taking care of yourself is so important! 🎯",
            actions=actions,
            sentiment=Sentiment.POSITIVE,
            category=Category.REMINDER,
        )

    if isinstance(intent, CreateTask):
        return AIResponse(
            text=f'{prefix}Added "{intent.content}" to your tasks! You\'re so organized, I\'m proud of you! ✅',
            actions=actions,
            sentiment=Sentiment.POSITIVE,
            category=Category.TASK,
        )

    if isinstance(intent, ScheduleEvent):
        when = f" for {intent.time}" if intent.time else ""
        return AIResponse(
            text=f'{prefix}Scheduled "{intent.title}"{when}. Your calendar is looking great! 📅',
            actions=actions,
            sentiment=Sentiment.POSITIVE,
            category=Category.GENERAL,
        )

    for pattern, text, sentiment, category in CANNED_REPLIES:
        if pattern.search(message):
            return AIResponse(text=f"{prefix}{text}", sentiment=sentiment, category=category)

    return AIResponse(text=f"{prefix}{DEFAULT_REPLY}")


def parse_backend_reply(raw: str, fallback_actions: list[Action]) -> AIResponse:
    """
    Interpret backend output.

    A JSON object is mapped field by field, with missing or invalid fields
    defaulted. Anything else is used verbatim as the reply text.
    """
    cleaned = _CODE_FENCE.sub("", raw.strip()).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        data = None

    if not isinstance(data, dict):
        return AIResponse(text=raw.strip(), actions=list(fallback_actions))

    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        text = raw.strip()

    raw_actions = data.get("actions")
    if isinstance(raw_actions, list):
        actions = []
        for entry in raw_actions:
            try:
                actions.append(Action.from_dict(entry))
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Dropping malformed action from backend: {entry!r} ({e})")
    else:
        actions = list(fallback_actions)

    try:
        sentiment = Sentiment(data.get("sentiment"))
    except (TypeError, ValueError):
        sentiment = Sentiment.NEUTRAL
    try:
        category = Category(data.get("category"))
    except (TypeError, ValueError):
        category = Category.GENERAL

    return AIResponse(text=text, actions=actions, sentiment=sentiment, category=category)


class ResponseComposer:
    """
    Produce an AIResponse for one utterance.

    With a backend configured the reply comes from the model; a failed call or
    an empty reply falls back to the templated path. Without a backend the
    templated path is always used.
    """

    def __init__(self, provider: TextCompleter | None = None):
        self.provider = provider

    async def compose(
        self,
        message: str,
        intent: Intent,
        actions: list[Action],
        context: ConversationContext,
    ) -> AIResponse:
        if self.provider is not None:
            try:
                raw = await self.provider.complete(build_prompt(message, context))
            except Exception as e:
                logger.warning(f"Generative backend error, using fallback: {e}")
            else:
                if raw and raw.strip():
                    return parse_backend_reply(raw, actions)
                logger.warning("Generative backend returned an empty reply, using fallback")

        return compose_templated(message, intent, actions, context)


def compose_greeting(now: datetime, mood: Mood, pending_tasks: int) -> str:
    """Opening message for a chat session."""
    if now.hour < 12:
        time_greeting = "Good morning"
    elif now.hour < 17:
        time_greeting = "Good afternoon"
    else:
        time_greeting = "Good evening"

    return (
        f"{time_greeting}! {MOOD_EMOJIS[mood]} I'm ChronoMate, your intelligent personal "
        f"assistant. I see you have {pending_tasks} pending tasks today. I'm here to help you "
        f"thrive - whether you need reminders, want to chat, or need help organizing your day. "
        f"How can I support you right now?"
    )

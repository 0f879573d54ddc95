"""Conversational layer: actions, context, composition and the assistant."""

from chronomate.assistant.actions import synthesize
from chronomate.assistant.composer import (
    AIResponse,
    Category,
    ResponseComposer,
    Sentiment,
    compose_greeting,
    compose_templated,
)
from chronomate.assistant.context import ConversationContext, ConversationHistory, HistoryEntry, Mood
from chronomate.assistant.service import Assistant

__all__ = [
    "AIResponse",
    "Assistant",
    "Category",
    "ConversationContext",
    "ConversationHistory",
    "HistoryEntry",
    "Mood",
    "ResponseComposer",
    "Sentiment",
    "compose_greeting",
    "compose_templated",
    "synthesize",
]

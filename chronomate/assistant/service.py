"""The assistant: one conversation, utterance in, AIResponse out."""

from typing import Literal

from loguru import logger

from chronomate.assistant.actions import synthesize
from chronomate.assistant.composer import AIResponse, ResponseComposer
from chronomate.assistant.context import ConversationContext, ConversationHistory, Mood
from chronomate.config.schema import Config
from chronomate.intent.extractor import IntentExtractor
from chronomate.providers.base import TextCompleter
from chronomate.providers.factory import create_provider
from chronomate.store.service import ChronoStore

RECENT_TASK_COUNT = 5


class Assistant:
    """
    Processes utterances for a single conversation.

    Callers serialize sends; each ``process`` call runs to completion and
    returns exactly one AIResponse. Executing the returned actions is left to
    the caller.
    """

    def __init__(
        self,
        context: ConversationContext,
        provider: TextCompleter | None = None,
        extractor: IntentExtractor | None = None,
    ):
        self.context = context
        self.extractor = extractor or IntentExtractor()
        self.composer = ResponseComposer(provider)

    @classmethod
    def from_store(
        cls,
        store: ChronoStore,
        config: Config,
        mood: str | None = None,
        provider: TextCompleter | None = None,
    ) -> "Assistant":
        """Build the session context from stored user data and tasks."""
        user = store.get_user_data()
        open_tasks = store.get_tasks(completed=False)[:RECENT_TASK_COUNT]
        preferences = user.preferences.model_dump()
        preferences["name"] = user.name or config.assistant.user_name

        context = ConversationContext(
            user_id=user.id,
            mood=Mood.parse(mood or user.mood.current or config.assistant.default_mood),
            recent_tasks=[t.title for t in open_tasks],
            habits=[h.name for h in user.habits],
            preferences=preferences,
            history=ConversationHistory(limit=config.assistant.history_limit),
        )
        return cls(context, provider=provider or create_provider(config))

    def add_to_history(self, role: Literal["user", "assistant"], content: str) -> None:
        self.context.add_to_history(role, content)

    async def process(self, message: str) -> AIResponse:
        """Extract, synthesize and compose a reply for one utterance.

        Both turns are recorded after composing, so the prompt history holds
        only earlier turns.
        """
        intent = self.extractor.extract(message)
        actions = synthesize(intent)
        logger.debug(f"{type(intent).__name__} produced {len(actions)} action(s)")

        response = await self.composer.compose(message, intent, actions, self.context)
        self.add_to_history("user", message)
        self.add_to_history("assistant", response.text)
        return response

"""Tests for the assistant session."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from chronomate.assistant.context import (
    HISTORY_LIMIT,
    ConversationContext,
    ConversationHistory,
    Mood,
)
from chronomate.assistant.service import Assistant
from chronomate.config.schema import Config
from chronomate.errors import ProviderCallError
from chronomate.intent.models import ActionKind
from chronomate.providers.base import TextCompleter


class TestConversationHistory:
    def test_evicts_oldest_first(self):
        history = ConversationHistory()
        for i in range(HISTORY_LIMIT + 5):
            history.append("user", f"message {i}")

        entries = history.entries()
        assert len(entries) == HISTORY_LIMIT
        assert entries[0].content == "message 5"
        assert entries[-1].content == f"message {HISTORY_LIMIT + 4}"

    def test_entries_is_a_copy(self):
        history = ConversationHistory(limit=3)
        history.append("user", "hi")

        history.entries().clear()

        assert len(history) == 1

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            ConversationHistory(limit=0)


class TestProcess:
    @pytest.mark.asyncio
    async def test_reply_and_history(self, context):
        assistant = Assistant(context)

        response = await assistant.process("remind me to call mom at 5 pm")

        assert response.text
        assert [a.kind for a in response.actions] == [ActionKind.CREATE_REMINDER]
        assert [(e.role, e.content) for e in context.history] == [
            ("user", "remind me to call mom at 5 pm"),
            ("assistant", response.text),
        ]

    @pytest.mark.asyncio
    async def test_every_message_gets_a_reply(self, context):
        assistant = Assistant(context)

        for message in ("", "hello", "what's up", "add tea to my todo list"):
            response = await assistant.process(message)
            assert response.text.strip()

    @pytest.mark.asyncio
    async def test_history_is_capped_across_turns(self, context):
        assistant = Assistant(context)

        for i in range(15):
            await assistant.process(f"message {i}")

        entries = context.history.entries()
        assert len(entries) == HISTORY_LIMIT
        assert entries[0].content == "message 5"
        assert entries[-1].role == "assistant"

    @pytest.mark.asyncio
    async def test_backend_failure_still_replies(self, context):
        provider = MagicMock(spec=TextCompleter)
        provider.complete = AsyncMock(side_effect=ProviderCallError("down"))
        assistant = Assistant(context, provider=provider)

        response = await assistant.process("add tea to my todo list")

        assert response.text.startswith('Added "tea"')
        provider.complete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_prompt_history_holds_only_earlier_turns(self, context):
        provider = MagicMock(spec=TextCompleter)
        provider.complete = AsyncMock(return_value="Sure!")
        assistant = Assistant(context, provider=provider)

        await assistant.process("plan my week")
        await assistant.process("and my weekend")

        first, second = [c.args[0] for c in provider.complete.await_args_list]
        assert "user: plan my week" not in first
        assert first.count("plan my week") == 1
        assert "user: plan my week" in second
        assert "assistant: Sure!" in second
        assert "user: and my weekend" not in second
        assert second.endswith('User message: "and my weekend"')
        assert [(e.role, e.content) for e in context.history][-2:] == [
            ("user", "and my weekend"),
            ("assistant", "Sure!"),
        ]


class TestFromStore:
    def test_context_is_built_from_store(self, store):
        store.update_user_data(name="Sam")
        store.update_mood("stressed")
        store.add_habit("morning run")
        for i in range(7):
            store.create_task(f"task {i}")
        done = store.create_task("finished")
        store.update_task(done.id, completed=True)
        config = Config()
        config.assistant.history_limit = 6

        assistant = Assistant.from_store(store, config)

        ctx = assistant.context
        assert ctx.mood == Mood.STRESSED
        assert ctx.preferences["name"] == "Sam"
        assert ctx.habits == ["morning run"]
        assert len(ctx.recent_tasks) == 5
        assert "finished" not in ctx.recent_tasks
        assert ctx.history.limit == 6
        assert assistant.composer.provider is None

    def test_explicit_mood_wins(self, store):
        assistant = Assistant.from_store(store, Config(), mood="tired")
        assert assistant.context.mood == Mood.TIRED

    def test_unknown_mood_is_neutral(self, store):
        store.update_mood("ecstatic")
        assert Assistant.from_store(store, Config()).context.mood == Mood.NEUTRAL

    def test_context_defaults(self):
        ctx = ConversationContext(user_id="u")
        assert ctx.mood == Mood.NEUTRAL
        assert ctx.history.limit == HISTORY_LIMIT

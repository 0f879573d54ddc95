"""Tests for reply composition: templates, backend replies and fallback."""

import json
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from chronomate.assistant.actions import synthesize
from chronomate.assistant.composer import (
    MOOD_EMOJIS,
    MOOD_PREFIXES,
    Category,
    ResponseComposer,
    Sentiment,
    compose_greeting,
    compose_templated,
    parse_backend_reply,
)
from chronomate.assistant.context import Mood
from chronomate.errors import ProviderCallError
from chronomate.intent.extractor import extract_intent
from chronomate.intent.models import Action, ActionKind
from chronomate.providers.base import TextCompleter


def _templated(message, context):
    intent = extract_intent(message)
    return compose_templated(message, intent, synthesize(intent), context)


def _provider(**kwargs) -> MagicMock:
    provider = MagicMock(spec=TextCompleter)
    provider.complete = AsyncMock(**kwargs)
    return provider


class TestMoodTables:
    def test_every_mood_has_a_prefix_and_emoji(self):
        assert set(MOOD_PREFIXES) == set(Mood)
        assert set(MOOD_EMOJIS) == set(Mood)

    def test_unknown_mood_is_neutral(self):
        assert Mood.parse("ecstatic") == Mood.NEUTRAL
        assert Mood.parse(None) == Mood.NEUTRAL
        assert Mood.parse(" Happy ") == Mood.HAPPY


class TestTemplatedReplies:
    def test_reminder_confirmation(self, context):
        response = _templated("remind me to call mom at 5 pm", context)

        assert response.text.startswith("Perfect! I'll remind you to call mom at 5 pm.")
        assert response.sentiment == Sentiment.POSITIVE
        assert response.category == Category.REMINDER
        assert len(response.actions) == 1

    def test_reminder_with_clock_only_fragment_and_repeat(self, context):
        response = _templated("set a reminder to stretch every 2 hours", context)
        assert "remind you to stretch every 2 hours." in response.text

    def test_task_confirmation(self, context):
        response = _templated("add buy milk to my todo list", context)

        assert response.text.startswith('Added "buy milk" to your tasks!')
        assert response.category == Category.TASK

    def test_event_confirmation(self, context):
        response = _templated("schedule team sync for tomorrow", context)

        assert response.text.startswith('Scheduled "team sync" for tomorrow.')
        assert response.category == Category.GENERAL
        assert response.sentiment == Sentiment.POSITIVE

    @pytest.mark.parametrize(
        ("message", "fragment", "sentiment", "category"),
        [
            ("hello!", "Hello!", Sentiment.POSITIVE, Category.GENERAL),
            ("how are you doing", "Hello!", Sentiment.POSITIVE, Category.GENERAL),
            ("thanks a lot", "You're so welcome!", Sentiment.POSITIVE, Category.GENERAL),
            ("I'm so overwhelmed", "I hear you", Sentiment.POSITIVE, Category.EMOTIONAL_SUPPORT),
            ("what is this", "I'm listening", Sentiment.NEUTRAL, Category.GENERAL),
        ],
    )
    def test_canned_replies(self, context, message, fragment, sentiment, category):
        response = _templated(message, context)

        assert response.text.startswith(fragment)
        assert response.sentiment == sentiment
        assert response.category == category
        assert response.actions == []

    @pytest.mark.parametrize("mood", list(Mood))
    def test_mood_prefix(self, context, mood):
        context.mood = mood
        response = _templated("add buy milk to my todo list", context)
        assert response.text.startswith(MOOD_PREFIXES[mood] + "Added")


class TestParseBackendReply:
    def test_full_json(self):
        raw = json.dumps({
            "text": "Done!",
            "actions": [{"type": "update_mood", "data": {"mood": "happy"}}],
            "sentiment": "positive",
            "category": "reflection",
        })

        response = parse_backend_reply(raw, [])

        assert response.text == "Done!"
        assert response.actions == [Action(ActionKind.UPDATE_MOOD, {"mood": "happy"})]
        assert response.sentiment == Sentiment.POSITIVE
        assert response.category == Category.REFLECTION

    def test_fenced_json(self):
        raw = '```json\n{"text": "Hi there", "sentiment": "neutral"}\n```'
        assert parse_backend_reply(raw, []).text == "Hi there"

    def test_missing_fields_use_defaults(self):
        fallback = [Action(ActionKind.CREATE_TASK, {"title": "x"})]
        response = parse_backend_reply('{"text": "ok", "sentiment": "ecstatic"}', fallback)

        assert response.actions == fallback
        assert response.sentiment == Sentiment.NEUTRAL
        assert response.category == Category.GENERAL

    def test_malformed_actions_are_dropped(self):
        raw = json.dumps({
            "text": "ok",
            "actions": [{"type": "launch_rocket"}, "nope", {"type": "create_task", "data": {"title": "a"}}],
        })
        response = parse_backend_reply(raw, [])
        assert response.actions == [Action(ActionKind.CREATE_TASK, {"title": "a"})]

    def test_plain_text(self):
        fallback = [Action(ActionKind.CREATE_TASK, {"title": "x"})]
        response = parse_backend_reply("Sure thing, I'll handle it.", fallback)

        assert response.text == "Sure thing, I'll handle it."
        assert response.actions == fallback
        assert response.sentiment == Sentiment.NEUTRAL
        assert response.category == Category.GENERAL

    def test_json_without_text_keeps_raw(self):
        raw = '{"sentiment": "positive"}'
        assert parse_backend_reply(raw, []).text == raw


class TestResponseComposer:
    @pytest.mark.asyncio
    async def test_templated_without_provider(self, context):
        composer = ResponseComposer()
        intent = extract_intent("hi")

        response = await composer.compose("hi", intent, [], context)

        assert response.text.startswith("Hello!")

    @pytest.mark.asyncio
    async def test_generative_path(self, context):
        provider = _provider(return_value='{"text": "On it!", "sentiment": "positive", "category": "task"}')
        composer = ResponseComposer(provider)
        message = "add buy milk to my todo list"
        intent = extract_intent(message)
        actions = synthesize(intent)

        response = await composer.compose(message, intent, actions, context)

        assert response.text == "On it!"
        assert response.category == Category.TASK
        assert response.actions == actions

        prompt = provider.complete.await_args.args[0]
        assert "Current mood: neutral" in prompt
        assert "write report, buy milk" in prompt
        assert "morning run" in prompt
        assert prompt.endswith(f'User message: "{message}"')

    @pytest.mark.asyncio
    async def test_prompt_embeds_history(self, context):
        provider = _provider(return_value="fine")
        context.add_to_history("user", "earlier question")
        context.add_to_history("assistant", "earlier answer")

        await ResponseComposer(provider).compose("hi", extract_intent("hi"), [], context)

        prompt = provider.complete.await_args.args[0]
        assert "Conversation history (2 messages)" in prompt
        assert "user: earlier question" in prompt
        assert "assistant: earlier answer" in prompt

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [ProviderCallError("timeout"), RuntimeError("boom")])
    async def test_transport_failure_falls_back(self, context, error):
        composer = ResponseComposer(_provider(side_effect=error))
        message = "remind me to call mom at 5 pm"
        intent = extract_intent(message)

        response = await composer.compose(message, intent, synthesize(intent), context)

        assert response.text.startswith("Perfect! I'll remind you")
        assert response.category == Category.REMINDER
        assert len(response.actions) == 1

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back(self, context):
        composer = ResponseComposer(_provider(return_value="   "))
        response = await composer.compose("thanks", extract_intent("thanks"), [], context)
        assert response.text.startswith("You're so welcome!")


class TestGreeting:
    @pytest.mark.parametrize(
        ("hour", "expected"),
        [(8, "Good morning"), (13, "Good afternoon"), (20, "Good evening")],
    )
    def test_time_of_day(self, hour, expected):
        text = compose_greeting(datetime(2026, 3, 10, hour), Mood.NEUTRAL, 3)

        assert text.startswith(f"{expected}! 🤗")
        assert "3 pending tasks" in text

    def test_mood_emoji(self):
        assert "😴" in compose_greeting(datetime(2026, 3, 10, 9), Mood.TIRED, 0)

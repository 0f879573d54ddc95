"""Shared fixtures for chronomate tests."""

import sys
from datetime import datetime

import pytest
from loguru import logger

from chronomate.assistant.context import ConversationContext, Mood
from chronomate.store.service import ChronoStore


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added by a test (e.g. via setup_logging) once it finishes."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def now():
    """A fixed reference instant: Tuesday 2026-03-10 14:00."""
    return datetime(2026, 3, 10, 14, 0, 0)


@pytest.fixture
def store(tmp_path):
    """An empty store backed by a temporary directory."""
    return ChronoStore.in_dir(tmp_path / "data")


@pytest.fixture
def context():
    """A neutral-mood conversation with a little state."""
    return ConversationContext(
        user_id="user-1",
        mood=Mood.NEUTRAL,
        recent_tasks=["write report", "buy milk"],
        habits=["morning run"],
        preferences={"name": "Sam"},
    )

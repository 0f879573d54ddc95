"""Turn extracted intents into store actions."""

from chronomate.intent.models import (
    Action,
    CreateReminder,
    CreateTask,
    General,
    Intent,
    ScheduleEvent,
)


def synthesize(intent: Intent) -> list[Action]:
    """Map an intent to the actions the store should run.

    General chat produces nothing; every other intent produces exactly one
    action whose data carries title, time, repeat and priority. Only the shape
    is guaranteed here; the executor validates and resolves times.
    """
    if isinstance(intent, General):
        return []

    if isinstance(intent, ScheduleEvent):
        title = intent.title
        repeat = None
    elif isinstance(intent, CreateReminder):
        title = intent.content
        repeat = intent.repeat.to_dict() if intent.repeat else None
    elif isinstance(intent, CreateTask):
        title = intent.content
        repeat = None
    else:
        raise TypeError(f"Unsupported intent: {intent!r}")

    return [Action(
        kind=intent.kind,
        data={
            "title": title,
            "time": intent.time,
            "repeat": repeat,
            "priority": intent.priority.value,
        },
    )]

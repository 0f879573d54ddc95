"""CLI commands for chronomate."""

import asyncio
from datetime import datetime

import typer
from rich.console import Console
from rich.table import Table

from chronomate import __logo__, __version__

app = typer.Typer(
    name="chronomate",
    help=f"{__logo__} chronomate - Conversational productivity assistant",
    no_args_is_help=True,
)

console = Console()

_PRIORITY_STYLE = {"high": "red", "medium": "yellow", "low": "green"}


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} chronomate v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """chronomate - Conversational productivity assistant."""
    from chronomate.logging_config import setup_logging

    setup_logging("DEBUG" if verbose else "WARNING")


# ============================================================================
# Shared helpers
# ============================================================================


def _open_store(config):
    from chronomate.store.service import ChronoStore

    return ChronoStore.in_dir(config.data_path)


def _format_time(value: datetime | None) -> str:
    return value.strftime("%a %d %b %H:%M") if value else "-"


def _print_response(response, results) -> None:
    """Print the assistant's reply and what happened to each action."""
    console.print(f"\n{__logo__} {response.text}")
    for result in results:
        kind = result.action.kind.value.replace("_", " ")
        if result.ok:
            console.print(f"  [green]✓[/green] [dim]{kind}[/dim] {_describe(result.record)}")
        else:
            console.print(f"  [red]✗[/red] [dim]{kind}[/dim] {result.error}")


def _describe(record) -> str:
    from chronomate.store.types import CalendarEvent, Reminder, Task

    if isinstance(record, Reminder):
        return f'"{record.title}" at {_format_time(record.scheduled_time)}'
    if isinstance(record, Task):
        due = f" due {_format_time(record.due_date)}" if record.due_date else ""
        return f'"{record.title}"{due}'
    if isinstance(record, CalendarEvent):
        return f'"{record.title}" {_format_time(record.start)} - {record.end.strftime("%H:%M")}'
    return str(record)


async def _handle(assistant, executor, message: str) -> None:
    response = await assistant.process(message)
    _print_response(response, executor.execute(response.actions))


# ============================================================================
# Onboard / Setup
# ============================================================================


@app.command()
def onboard():
    """Initialize chronomate configuration and data directory."""
    from chronomate.config.loader import get_config_path, save_config
    from chronomate.config.schema import Config

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    config = Config()
    save_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")

    config.data_path.mkdir(parents=True, exist_ok=True)
    console.print(f"[green]✓[/green] Created data directory at {config.data_path}")

    console.print(f"\n{__logo__} chronomate is ready!")
    console.print("\nNext steps:")
    console.print(f"  1. (Optional) Add a Gemini or OpenAI key to [cyan]{config_path}[/cyan]")
    console.print('  2. Chat: [cyan]chronomate chat[/cyan] or [cyan]chronomate ask "remind me to stretch in 10 minutes"[/cyan]')


# ============================================================================
# Conversation
# ============================================================================


@app.command()
def chat(
    mood: str = typer.Option(None, "--mood", "-m", help="Your current mood (happy, sad, stressed, tired, neutral)"),
):
    """Chat with the assistant interactively."""
    from chronomate.assistant.composer import compose_greeting
    from chronomate.assistant.service import Assistant
    from chronomate.config.loader import load_config
    from chronomate.store.executor import ActionExecutor

    config = load_config()
    store = _open_store(config)
    assistant = Assistant.from_store(store, config, mood=mood)
    executor = ActionExecutor(store)

    pending = store.get_productivity_insights()["pending_tasks"]
    console.print(f"{__logo__} {compose_greeting(datetime.now(), assistant.context.mood, pending)}")
    console.print("[dim](Ctrl+C to exit)[/dim]\n")

    async def run_interactive():
        while True:
            try:
                user_input = console.input("[bold blue]You:[/bold blue] ")
            except (KeyboardInterrupt, EOFError):
                console.print("\nGoodbye!")
                break
            if not user_input.strip():
                continue
            await _handle(assistant, executor, user_input)
            console.print()

    asyncio.run(run_interactive())


@app.command()
def ask(
    message: str = typer.Argument(..., help="What to say to the assistant"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show actions without saving them"),
):
    """Send a single message to the assistant."""
    from chronomate.assistant.service import Assistant
    from chronomate.config.loader import load_config
    from chronomate.store.executor import ActionExecutor

    config = load_config()
    store = _open_store(config)
    assistant = Assistant.from_store(store, config)
    executor = ActionExecutor(store)

    async def run_once():
        response = await assistant.process(message)
        if dry_run:
            console.print(f"\n{__logo__} {response.text}")
            for action in response.actions:
                console.print(f"  [dim]{action.kind.value}[/dim] {action.data}")
            return
        _print_response(response, executor.execute(response.actions))

    asyncio.run(run_once())


# ============================================================================
# Tasks
# ============================================================================


@app.command()
def tasks(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
    today: bool = typer.Option(False, "--today", help="Only tasks due today"),
):
    """List tasks."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())
    items = store.get_tasks(completed=None if show_all else False, due_today=today)

    table = Table(title="Tasks")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Due")
    table.add_column("Done")

    for t in items:
        style = _PRIORITY_STYLE[t.priority.value]
        table.add_row(
            t.id[:8],
            t.title,
            f"[{style}]{t.priority.value}[/{style}]",
            _format_time(t.due_date),
            "✓" if t.completed else "",
        )

    console.print(table)


def _find_by_prefix(items, prefix: str):
    matches = [i for i in items if i.id.startswith(prefix)]
    if len(matches) != 1:
        console.print(f"[red]{'No' if not matches else 'Ambiguous'} match for id {prefix}[/red]")
        raise typer.Exit(1)
    return matches[0]


@app.command()
def done(task_id: str = typer.Argument(..., help="Task id (or unique prefix)")):
    """Mark a task as completed."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())
    task = _find_by_prefix(store.get_tasks(), task_id)
    store.update_task(task.id, completed=True)
    console.print(f"[green]✓[/green] Completed \"{task.title}\"")


# ============================================================================
# Reminders
# ============================================================================


@app.command()
def reminders(
    due: bool = typer.Option(False, "--due", help="Only reminders that are due now"),
):
    """List open reminders."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())
    items = store.get_due_reminders() if due else store.get_reminders(completed=False)

    table = Table(title="Reminders")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("When")
    table.add_column("Repeat")
    table.add_column("Snoozed until")

    for r in items:
        repeat = f"{r.repeat.type} x{r.repeat.interval}" if r.repeat else "-"
        snoozed = _format_time(r.snooze_until) if r.snoozed else "-"
        table.add_row(r.id[:8], r.title, _format_time(r.scheduled_time), repeat, snoozed)

    console.print(table)


@app.command()
def snooze(
    reminder_id: str = typer.Argument(..., help="Reminder id (or unique prefix)"),
    minutes: int = typer.Argument(10, help="Minutes to snooze"),
):
    """Snooze a reminder."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())
    reminder = _find_by_prefix(store.get_reminders(), reminder_id)
    store.snooze_reminder(reminder.id, minutes)
    console.print(f"[green]✓[/green] Snoozed \"{reminder.title}\" for {minutes} minutes")


# ============================================================================
# Calendar / mood / insights
# ============================================================================


@app.command()
def events():
    """List calendar events."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())

    table = Table(title="Calendar")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Category")

    for e in store.get_events():
        table.add_row(
            e.id[:8],
            e.title,
            _format_time(e.start),
            _format_time(e.end),
            f"[{e.color}]{e.category}[/]",
        )

    console.print(table)


@app.command()
def mood(
    value: str = typer.Argument(..., help="How you feel (happy, sad, stressed, tired, neutral)"),
    notes: str = typer.Option(None, "--notes", "-n", help="Optional note"),
):
    """Record your current mood."""
    from chronomate.config.loader import load_config

    store = _open_store(load_config())
    store.update_mood(value, notes)
    console.print(f"[green]✓[/green] Mood set to {value}")


@app.command()
def insights():
    """Show productivity statistics."""
    from chronomate.config.loader import load_config

    stats = _open_store(load_config()).get_productivity_insights()

    table = Table(title="Productivity")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Weekly completion rate", f"{stats['weekly_completion_rate']}%")
    table.add_row("Total tasks", str(stats["total_tasks"]))
    table.add_row("Completed", str(stats["completed_tasks"]))
    table.add_row("Pending", str(stats["pending_tasks"]))
    table.add_row("Overdue", str(stats["overdue_tasks"]))
    console.print(table)


if __name__ == "__main__":
    app()

"""Command-line interface for habit tracking."""

from __future__ import annotations

import json
from functools import wraps
from typing import Any, Callable, Optional

import click

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .logging_config import setup_logging
from .models.recurrence import DAILY, FREQUENCIES
from .services.calendar import format_date_human
from .services.habits import HabitService

_DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _parse_days(value: Optional[str]) -> Optional[list[int]]:
    if not value:
        return None
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise click.BadParameter("Days must be comma-separated numbers 0-6 (0=Sun)") from exc


def _echo(data: Any, as_json: bool, render: Callable[[Any], str]) -> None:
    if as_json:
        click.echo(json.dumps(data, indent=2, default=str))
    else:
        click.echo(render(data))


def _describe_schedule(habit: dict) -> str:
    if habit["frequency"] == "specific_days":
        labels = ", ".join(_DAY_LABELS[d] for d in habit["days"] or [])
        return f"specific_days ({labels or 'none'})"
    return habit["frequency"]


def _render_habit(habit: dict) -> str:
    status = "" if habit["is_active"] else " [archived]"
    return (
        f"#{habit['id']} {habit['title']}{status} - {_describe_schedule(habit)} - "
        f"streak {habit['current_streak']} (best {habit['best_streak']})"
    )


def _render_habit_list(habits: list[dict]) -> str:
    if not habits:
        return "No habits yet."
    return "\n".join(_render_habit(h) for h in habits)


def _render_detail(detail: dict) -> str:
    lines = [_render_habit(detail), f"Due today: {'yes' if detail['due_today'] else 'no'}"]
    if detail["last_completed_on"]:
        lines.append(f"Last completed: {format_date_human(detail['last_completed_on'])}")
    if detail["recent_completions"]:
        lines.append("Recent completions:")
        for completion in detail["recent_completions"]:
            note = f" - {completion['note']}" if completion["note"] else ""
            lines.append(f"  {format_date_human(completion['occurred_on'])}{note}")
    return "\n".join(lines)


def _render_streaks(rows: list[dict]) -> str:
    if not rows:
        return "No active habits."
    width = max(len(row["title"]) for row in rows)
    return "\n".join(
        f"{row['title']:<{width}}  current {row['current_streak']:>3}  best {row['best_streak']:>3}"
        for row in rows
    )


def _render_due(rows: list[dict]) -> str:
    if not rows:
        return "Nothing due today."
    return "\n".join(f"[{'x' if row['done'] else ' '}] #{row['id']} {row['title']}" for row in rows)


def _service_errors(func):
    """Report service validation errors as clean CLI failures."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the database and logs.",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Optional[str]) -> None:
    """Track habits and their streaks."""

    config = BaseConfig(data_dir=data_dir)
    setup_logging(config)
    _, session_factory = bootstrap_database(config)
    ctx.obj = HabitService(SQLModelHabitRepository(session_factory))


@main.group("habits", invoke_without_command=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def habits(ctx: click.Context, as_json: bool) -> None:
    """List active habits with streaks."""

    if ctx.invoked_subcommand is None:
        service: HabitService = ctx.obj
        _echo([h.to_dict() for h in service.list_habits()], as_json, _render_habit_list)


@habits.command("add")
@click.argument("title")
@click.option("--frequency", type=click.Choice(FREQUENCIES), default=DAILY, show_default=True)
@click.option("--days", help="Days for specific_days (comma-separated, 0=Sun..6=Sat)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def add_habit(service: HabitService, title: str, frequency: str, days: Optional[str], as_json: bool) -> None:
    """Create a new habit."""

    habit = service.add(title, frequency=frequency, days=_parse_days(days))
    _echo(habit.to_dict(), as_json, _render_habit)


@habits.command("show")
@click.argument("habit_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def show_habit(service: HabitService, habit_id: int, as_json: bool) -> None:
    """Show habit details with recent completions."""

    _echo(service.show(habit_id).to_dict(), as_json, _render_detail)


@habits.command("edit")
@click.argument("habit_id", type=int)
@click.option("--title")
@click.option("--frequency", type=click.Choice(FREQUENCIES))
@click.option("--days", help="Days (comma-separated, 0=Sun..6=Sat)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def edit_habit(
    service: HabitService,
    habit_id: int,
    title: Optional[str],
    frequency: Optional[str],
    days: Optional[str],
    as_json: bool,
) -> None:
    """Update a habit."""

    habit = service.edit(habit_id, title=title, frequency=frequency, days=_parse_days(days))
    _echo(habit.to_dict(), as_json, _render_habit)


@habits.command("check")
@click.argument("habit_id", type=int)
@click.argument("day", required=False)
@click.option("--note")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def check_habit(
    service: HabitService, habit_id: int, day: Optional[str], note: Optional[str], as_json: bool
) -> None:
    """Mark a habit done for DAY (YYYY-MM-DD, default: today)."""

    completion = service.check(habit_id, day, note=note)
    _echo(
        completion.to_dict(),
        as_json,
        lambda c: f"Checked #{c['habit_id']} for {format_date_human(c['occurred_on'])}.",
    )


@habits.command("uncheck")
@click.argument("habit_id", type=int)
@click.argument("day", required=False)
@click.pass_obj
@_service_errors
def uncheck_habit(service: HabitService, habit_id: int, day: Optional[str]) -> None:
    """Remove the completion for DAY (default: today)."""

    service.uncheck(habit_id, day)
    click.echo("Completion removed.")


@habits.command("archive")
@click.argument("habit_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def archive_habit(service: HabitService, habit_id: int, as_json: bool) -> None:
    """Deactivate a habit."""

    _echo(service.archive(habit_id).to_dict(), as_json, _render_habit)


@habits.command("restore")
@click.argument("habit_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
@_service_errors
def restore_habit(service: HabitService, habit_id: int, as_json: bool) -> None:
    """Reactivate a habit."""

    _echo(service.restore(habit_id).to_dict(), as_json, _render_habit)


@habits.command("rm")
@click.argument("habit_id", type=int)
@click.pass_obj
@_service_errors
def remove_habit(service: HabitService, habit_id: int) -> None:
    """Delete a habit and its completions."""

    service.remove(habit_id)
    click.echo("Habit deleted.")


@habits.command("streaks")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def habit_streaks(service: HabitService, as_json: bool) -> None:
    """Show streak overview for all active habits."""

    _echo([row.to_dict() for row in service.streaks()], as_json, _render_streaks)


@habits.command("due")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def habits_due(service: HabitService, as_json: bool) -> None:
    """List habits due today and whether they are done."""

    _echo([row.to_dict() for row in service.due_today()], as_json, _render_due)


__all__ = ["main"]

"""Flask CLI commands for Momentum."""

from __future__ import annotations

import click
from flask import current_app

from .errors import HabitNotFoundError, MalformedDateError
from .services.dates import normalize

_WEEKDAY_LABELS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")


def _ctx():
    return current_app.extensions["momentum"]


def _format_calendar(month, week_start: int) -> list[str]:
    header = " ".join(_WEEKDAY_LABELS[(week_start + offset) % 7] for offset in range(7))
    lines = [header]
    for week in month.weeks():
        cells = []
        for cell in week:
            if not cell.in_month:
                cells.append(" .")
            elif cell.completed:
                cells.append(" x")
            else:
                cells.append(f"{cell.day.day:2d}")
        lines.append(" ".join(cells))
    return lines


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("momentum-create-user")
    @click.argument("username")
    def momentum_create_user(username: str) -> None:
        """Create (or look up) a user and print its id."""

        user = _ctx().user_repo.get_or_create(username)
        click.echo(f"User {user.username} has id {user.id}")

    @app.cli.command("momentum-complete")
    @click.argument("habit_id", type=int)
    @click.option("--user", "user_id", type=int, required=True, help="Owner of the habit")
    @click.option("--date", "day", default=None, help="Completion day (YYYY-MM-DD), defaults to today")
    def momentum_complete(habit_id: int, user_id: int, day: str | None) -> None:
        """Record a completion for a habit."""

        ctx = _ctx()
        try:
            completed = ctx.analytics.today() if day is None else normalize(day)
        except MalformedDateError as exc:
            raise click.BadParameter(str(exc), param_hint="--date") from exc
        try:
            ctx.habit_repo.add_completion(habit_id, completed, user_id=user_id)
        except HabitNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Habit {habit_id} completed on {completed.isoformat()}")

    @app.cli.command("momentum-streak")
    @click.argument("habit_id", type=int)
    @click.option("--user", "user_id", type=int, required=True, help="Owner of the habit")
    def momentum_streak(habit_id: int, user_id: int) -> None:
        """Print the current and longest streak of a habit."""

        try:
            streak = _ctx().analytics.compute_streak(habit_id, user_id=user_id)
        except HabitNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Current streak: {streak.current_streak}")
        click.echo(f"Longest streak: {streak.longest_streak}")

    @app.cli.command("momentum-calendar")
    @click.argument("habit_id", type=int)
    @click.option("--user", "user_id", type=int, required=True, help="Owner of the habit")
    @click.option("--year", type=int, default=None)
    @click.option("--month", type=click.IntRange(1, 12), default=None)
    def momentum_calendar(habit_id: int, user_id: int, year: int | None, month: int | None) -> None:
        """Print a month grid for a habit (x marks completed days)."""

        ctx = _ctx()
        today = ctx.analytics.today()
        try:
            grid = ctx.analytics.project_calendar(
                habit_id, year or today.year, month or today.month, user_id=user_id
            )
        except HabitNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"{grid.year}-{grid.month:02d}: {grid.completion_rate}% completed")
        for line in _format_calendar(grid, ctx.config.WEEK_START):
            click.echo(line)

    @app.cli.command("momentum-stats")
    @click.option("--user", "user_id", type=int, required=True)
    @click.option("--start", default=None, help="Period start (YYYY-MM-DD)")
    @click.option("--end", default=None, help="Period end (YYYY-MM-DD)")
    def momentum_stats(user_id: int, start: str | None, end: str | None) -> None:
        """Print completion rate, best streak and top habits."""

        analytics = _ctx().analytics
        if (start is None) != (end is None):
            raise click.UsageError("Provide both --start and --end, or neither.")
        try:
            if start is None:
                stats = analytics.month_statistics(user_id)
            else:
                stats = analytics.compute_user_statistics(user_id, start, end)
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(f"Period: {stats.period_start.isoformat()} .. {stats.period_end.isoformat()}")
        click.echo(f"Completion rate: {stats.completion_rate}%")
        click.echo(f"Best streak: {stats.best_streak}")
        click.echo(f"Completions: {stats.total_completions} (this week {stats.weekly_completions})")
        if not stats.top_habits:
            click.echo("No habits yet.")
            return
        click.echo("Top habits:")
        for rank, item in enumerate(stats.top_habits, start=1):
            click.echo(
                f"  #{rank} {item.habit.name}: {item.count} completions, "
                f"{item.current_streak} day streak"
            )

"""Tests for the Flask CLI commands."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from momentum.models import Habit

TODAY = date(2024, 6, 12)


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def habit(ctx, app_user) -> Habit:
    return ctx.habit_repo.create(Habit(user_id=app_user.id, name="Meditate"), user_id=app_user.id)


def test_create_user(runner, ctx):
    result = runner.invoke(args=["momentum-create-user", "sam"])

    assert result.exit_code == 0
    user = ctx.user_repo.get_or_create("sam")
    assert f"User sam has id {user.id}" in result.output


def test_complete_with_date(runner, ctx, habit, app_user):
    result = runner.invoke(
        args=["momentum-complete", str(habit.id), "--user", str(app_user.id), "--date", "2024-06-01"]
    )

    assert result.exit_code == 0, result.output
    assert f"Habit {habit.id} completed on 2024-06-01" in result.output
    rows = ctx.habit_repo.list_completions(habit.id, user_id=app_user.id)
    assert [row.completed_date for row in rows] == [date(2024, 6, 1)]


def test_complete_defaults_to_today(runner, habit, app_user):
    result = runner.invoke(args=["momentum-complete", str(habit.id), "--user", str(app_user.id)])

    assert result.exit_code == 0
    assert "completed on 2024-06-12" in result.output


def test_complete_malformed_date(runner, habit, app_user):
    result = runner.invoke(
        args=["momentum-complete", str(habit.id), "--user", str(app_user.id), "--date", "someday"]
    )

    assert result.exit_code == 2
    assert "--date" in result.output


def test_complete_unknown_habit(runner, app_user):
    result = runner.invoke(args=["momentum-complete", "999", "--user", str(app_user.id)])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_streak(runner, ctx, habit, app_user):
    for offset in (0, 1, 2, 4):
        ctx.habit_repo.add_completion(habit.id, TODAY - timedelta(days=offset), user_id=app_user.id)

    result = runner.invoke(args=["momentum-streak", str(habit.id), "--user", str(app_user.id)])

    assert result.exit_code == 0
    assert "Current streak: 3" in result.output
    assert "Longest streak: 3" in result.output


def test_streak_unknown_habit(runner, app_user):
    result = runner.invoke(args=["momentum-streak", "999", "--user", str(app_user.id)])

    assert result.exit_code == 1
    assert "Habit 999 not found" in result.output


def test_calendar(runner, ctx, habit, app_user):
    for day in (1, 2, 3):
        ctx.habit_repo.add_completion(habit.id, date(2024, 6, day), user_id=app_user.id)

    result = runner.invoke(args=["momentum-calendar", str(habit.id), "--user", str(app_user.id)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "2024-06: 10% completed"
    assert lines[1] == "Su Mo Tu We Th Fr Sa"
    # six weeks for June 2024 with a Sunday start
    assert len(lines) == 8


def test_stats_without_habits(runner, app_user):
    result = runner.invoke(args=["momentum-stats", "--user", str(app_user.id)])

    assert result.exit_code == 0
    assert "Period: 2024-06-01 .. 2024-06-30" in result.output
    assert "No habits yet." in result.output


def test_stats_with_range(runner, ctx, habit, app_user):
    for day in (10, 11, 12):
        ctx.habit_repo.add_completion(habit.id, date(2024, 6, day), user_id=app_user.id)

    result = runner.invoke(
        args=[
            "momentum-stats",
            "--user",
            str(app_user.id),
            "--start",
            "2024-06-10",
            "--end",
            "2024-06-12",
        ]
    )

    assert result.exit_code == 0, result.output
    assert "Completion rate: 100%" in result.output
    assert "Best streak: 3" in result.output
    assert "#1 Meditate: 3 completions, 3 day streak" in result.output


def test_stats_requires_both_bounds(runner, app_user):
    result = runner.invoke(args=["momentum-stats", "--user", str(app_user.id), "--start", "2024-06-01"])

    assert result.exit_code == 2


def test_stats_reversed_period(runner, app_user):
    result = runner.invoke(
        args=["momentum-stats", "--user", str(app_user.id), "--start", "2024-06-10", "--end", "2024-06-01"]
    )

    assert result.exit_code == 1
    assert "before" in result.output

"""Tests for the SQLModel repositories backing the completion store."""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import select

from momentum.errors import HabitNotFoundError
from momentum.infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)
from momentum.models import Category, Completion, Habit


class TestHabitRepository:
    def test_create_and_get(self, session_factory, user):
        repo = SQLModelHabitRepository(session_factory)

        created = repo.create(Habit(user_id=user.id, name="Stretch", target_count=2), user_id=user.id)
        fetched = repo.get_by_id(created.id, user_id=user.id)

        assert fetched is not None
        assert fetched.name == "Stretch"
        assert fetched.frequency == "daily"
        assert fetched.color == "#3b82f6"
        assert fetched.target_count == 2

    def test_get_is_scoped_by_owner(self, session_factory, habit_factory, user, other_user):
        habit = habit_factory(name="Private", owner=other_user)
        repo = SQLModelHabitRepository(session_factory)

        assert repo.get_by_id(habit.id, user_id=user.id) is None
        assert repo.get_by_id(habit.id, user_id=other_user.id) is not None

    def test_list_all_newest_first_and_scoped(self, session_factory, habit_factory, user, other_user):
        first = habit_factory(name="First")
        second = habit_factory(name="Second")
        habit_factory(name="Elsewhere", owner=other_user)

        habits = SQLModelHabitRepository(session_factory).list_all(user_id=user.id)

        assert [habit.id for habit in habits] == [second.id, first.id]

    def test_update(self, session_factory, habit_factory, user):
        habit = habit_factory(name="Old name")
        repo = SQLModelHabitRepository(session_factory)

        habit.name = "New name"
        habit.frequency = "weekly"
        repo.update(habit, user_id=user.id)

        fetched = repo.get_by_id(habit.id, user_id=user.id)
        assert fetched.name == "New name"
        assert fetched.frequency == "weekly"

    def test_delete_cascades_to_completions(
        self, session_factory, habit_factory, completion_factory, user, db_session
    ):
        habit = habit_factory(name="Doomed")
        habit_id = habit.id
        completion_factory(habit, date(2024, 6, 1), date(2024, 6, 2))
        repo = SQLModelHabitRepository(session_factory)

        assert repo.delete(habit_id, user_id=user.id) is True

        db_session.expire_all()
        assert repo.get_by_id(habit_id, user_id=user.id) is None
        remaining = db_session.exec(select(Completion).where(Completion.habit_id == habit_id)).all()
        assert remaining == []

    def test_delete_missing_or_foreign(self, session_factory, habit_factory, user, other_user):
        habit = habit_factory(name="Theirs", owner=other_user)
        repo = SQLModelHabitRepository(session_factory)

        assert repo.delete(habit.id, user_id=user.id) is False
        assert repo.delete(12345, user_id=user.id) is False
        assert repo.get_by_id(habit.id, user_id=other_user.id) is not None


class TestCompletionStore:
    def test_same_day_duplicates_are_stored(self, session_factory, habit_factory, user):
        habit = habit_factory(name="Water")
        repo = SQLModelHabitRepository(session_factory)

        repo.add_completion(habit.id, date(2024, 6, 1), user_id=user.id)
        repo.add_completion(habit.id, date(2024, 6, 1), user_id=user.id)

        assert len(repo.list_completions(habit.id, user_id=user.id)) == 2

    def test_completion_for_foreign_habit_is_rejected(
        self, session_factory, habit_factory, user, other_user
    ):
        habit = habit_factory(name="Theirs", owner=other_user)
        repo = SQLModelHabitRepository(session_factory)

        with pytest.raises(HabitNotFoundError):
            repo.add_completion(habit.id, date(2024, 6, 1), user_id=user.id)

        assert repo.list_completions(habit.id, user_id=other_user.id) == []

    def test_range_query_is_inclusive(self, session_factory, habit_factory, completion_factory, user):
        habit = habit_factory(name="Read")
        completion_factory(habit, *(date(2024, 1, day) for day in range(1, 11)))
        repo = SQLModelHabitRepository(session_factory)

        rows = repo.get_completions(habit.id, date(2024, 1, 3), date(2024, 1, 7), user_id=user.id)

        assert sorted(row.completed_date for row in rows) == [date(2024, 1, day) for day in range(3, 8)]

    def test_range_query_is_scoped(
        self, session_factory, habit_factory, completion_factory, user, other_user
    ):
        habit = habit_factory(name="Theirs", owner=other_user)
        completion_factory(habit, date(2024, 1, 1))
        repo = SQLModelHabitRepository(session_factory)

        assert repo.get_completions(habit.id, date(2024, 1, 1), date(2024, 1, 1), user_id=user.id) == []
        assert repo.list_completions(habit.id, user_id=user.id) == []

    def test_delete_completion(self, session_factory, habit_factory, user):
        habit = habit_factory(name="Run")
        repo = SQLModelHabitRepository(session_factory)
        completion = repo.add_completion(habit.id, date(2024, 6, 1), user_id=user.id)

        assert repo.delete_completion(completion.id, habit_id=habit.id, user_id=user.id) is True
        assert repo.delete_completion(completion.id, habit_id=habit.id, user_id=user.id) is False
        assert repo.list_completions(habit.id, user_id=user.id) == []


class TestCategoryRepository:
    def test_create_and_list(self, session_factory, user):
        repo = SQLModelCategoryRepository(session_factory)
        repo.create(Category(user_id=user.id, name="Mind", color="#a855f7"), user_id=user.id)
        repo.create(Category(user_id=user.id, name="Body", color="#ef4444"), user_id=user.id)

        assert [c.name for c in repo.list_all(user_id=user.id)] == ["Body", "Mind"]

    def test_update(self, session_factory, category_factory, user):
        category = category_factory(name="Helth")
        repo = SQLModelCategoryRepository(session_factory)

        category.name = "Health"
        repo.update(category, user_id=user.id)

        assert repo.get_by_id(category.id, user_id=user.id).name == "Health"

    def test_delete_keeps_habits(
        self, session_factory, category_factory, habit_factory, user, db_session
    ):
        category = category_factory(name="Fitness")
        habit = habit_factory(name="Push-ups", category_id=category.id)
        repo = SQLModelCategoryRepository(session_factory)

        assert repo.delete(category.id, user_id=user.id) is True

        assert repo.get_by_id(category.id, user_id=user.id) is None
        survivor = SQLModelHabitRepository(session_factory).get_by_id(habit.id, user_id=user.id)
        assert survivor is not None
        assert survivor.category_id is None

    def test_delete_foreign_category(self, session_factory, category_factory, user, other_user):
        category = category_factory(name="Theirs", owner=other_user)
        assert SQLModelCategoryRepository(session_factory).delete(category.id, user_id=user.id) is False


class TestUserRepository:
    def test_get_or_create_is_idempotent(self, session_factory):
        repo = SQLModelUserRepository(session_factory)

        first = repo.get_or_create("alex")
        second = repo.get_or_create("alex")

        assert first.id == second.id
        assert repo.get_by_id(first.id).username == "alex"
        assert repo.get_by_id(9999) is None

"""Pytest configuration and shared fixtures for Momentum tests.

Provides an isolated SQLite database per test, owner-scoped data factories
and a Flask app wired to a pinned "today" so streak and calendar assertions
do not depend on the wall clock.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from momentum.models import Category, Completion, Habit, User

# Wednesday; June 2024 has 30 days and starts on a Saturday.
TODAY = date(2024, 6, 12)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    # Statistics fetches run on worker threads
    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory for repositories that expect Callable[[], Session]."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Test Data Factories
# =============================================================================


def _persist(db_session, obj):
    db_session.add(obj)
    db_session.commit()
    db_session.refresh(obj)
    return obj


@pytest.fixture
def user(db_session) -> User:
    """Default owner for scoping data."""
    return _persist(db_session, User(username="tester"))


@pytest.fixture
def other_user(db_session) -> User:
    """A second owner used to check that queries never cross users."""
    return _persist(db_session, User(username="intruder"))


@pytest.fixture
def category_factory(db_session, user):
    """Factory for creating test categories."""

    def _create_category(
        name: str = "Health",
        color: str = "#22c55e",
        icon: str | None = None,
        owner: User | None = None,
    ) -> Category:
        owner = owner or user
        return _persist(db_session, Category(user_id=owner.id, name=name, color=color, icon=icon))

    return _create_category


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating test habits."""

    def _create_habit(
        name: str = "Test Habit",
        frequency: str = "daily",
        category_id: int | None = None,
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(
            user_id=owner.id,
            name=name,
            frequency=frequency,
            category_id=category_id,
        )
        return _persist(db_session, habit)

    return _create_habit


@pytest.fixture
def completion_factory(db_session):
    """Factory for completion rows; duplicates on the same day are allowed."""

    def _complete(habit: Habit, *days: date) -> list[Completion]:
        rows = [
            Completion(habit_id=habit.id, user_id=habit.user_id, completed_date=day)
            for day in days
        ]
        db_session.add_all(rows)
        db_session.commit()
        return rows

    return _complete


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def test_config(tmp_path, monkeypatch):
    """TestConfig pointed at a throwaway data directory."""
    from momentum.config import TestConfig

    monkeypatch.setenv("MOMENTUM_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("MOMENTUM_DATABASE_URL", raising=False)
    monkeypatch.delenv("MOMENTUM_WEEK_START", raising=False)
    return TestConfig()


@pytest.fixture
def app(test_config):
    from momentum import create_app

    flask_app = create_app(config=test_config, clock=lambda: TODAY)
    yield flask_app
    flask_app.extensions["momentum"].dispose()


@pytest.fixture
def ctx(app):
    """The AppContext behind the Flask app."""
    return app.extensions["momentum"]


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def app_user(ctx) -> User:
    return ctx.user_repo.get_or_create("tester")


@pytest.fixture
def auth_headers(app_user) -> dict[str, str]:
    return {"X-User-Id": str(app_user.id)}

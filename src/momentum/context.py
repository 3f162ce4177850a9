"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelGoalRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)
from .services.analytics import HabitAnalytics
from .services.dates import DateLike


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    # Repositories
    habit_repo: SQLModelHabitRepository
    category_repo: SQLModelCategoryRepository
    goal_repo: SQLModelGoalRepository
    user_repo: SQLModelUserRepository

    # Services
    analytics: HabitAnalytics

    def dispose(self) -> None:
        """Release pooled database connections."""
        self.engine.dispose()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Callable[[], DateLike] = date.today,
) -> AppContext:
    """Create and initialize the application context.

    ``clock`` supplies "today" to the analytics; tests pin it to a fixed day.
    """

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    habit_repo = SQLModelHabitRepository(session_factory)
    goal_repo = SQLModelGoalRepository(
        session_factory, default_target=config.DEFAULT_DAILY_TARGET
    )
    analytics = HabitAnalytics(
        habit_repo,
        goal_repo,
        clock=clock,
        week_start=config.WEEK_START,
        top_n=config.TOP_HABITS_LIMIT,
        fetch_workers=config.STATS_FETCH_WORKERS,
    )

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        category_repo=SQLModelCategoryRepository(session_factory),
        goal_repo=goal_repo,
        user_repo=SQLModelUserRepository(session_factory),
        analytics=analytics,
    )

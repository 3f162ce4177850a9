"""Daily goal repository with create-on-read semantics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from sqlmodel import Session, select

from ...models.goal import DEFAULT_TARGET_COMPLETIONS, DailyGoal


class SQLModelGoalRepository:
    """SQLModel-based daily goal repository."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        default_target: int = DEFAULT_TARGET_COMPLETIONS,
    ):
        self.session_factory = session_factory
        self.default_target = default_target

    def get_daily_goal(self, *, user_id: int) -> DailyGoal:
        with self.session_factory() as session:
            goal = session.exec(select(DailyGoal).where(DailyGoal.user_id == user_id)).first()
            if goal is None:
                goal = DailyGoal(user_id=user_id, target_completions=self.default_target)
                session.add(goal)
                session.commit()
                session.refresh(goal)
            session.expunge(goal)
            return goal

    def set_daily_goal(self, target_completions: int, *, user_id: int) -> DailyGoal:
        with self.session_factory() as session:
            goal = session.exec(select(DailyGoal).where(DailyGoal.user_id == user_id)).first()
            if goal is None:
                goal = DailyGoal(user_id=user_id, target_completions=target_completions)
            else:
                goal.target_completions = target_completions
                goal.updated_at = datetime.now(timezone.utc)
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal


__all__ = ["SQLModelGoalRepository"]

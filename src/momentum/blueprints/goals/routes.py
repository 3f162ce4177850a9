"""Daily goal routes."""

from __future__ import annotations

from flask import jsonify

from ..utils import app_context, current_user_id, request_payload
from . import bp
from .forms import DailyGoalForm


@bp.get("/")
def get_goal():
    """Return the goal (created with the default target on first access) and today's progress."""

    user_id = current_user_id()
    progress = app_context().analytics.daily_goal(user_id)
    return jsonify(progress.to_dict())


@bp.put("/")
def update_goal():
    user_id = current_user_id()
    form = DailyGoalForm.model_validate(request_payload())
    ctx = app_context()
    ctx.goal_repo.set_daily_goal(form.target_completions, user_id=user_id)
    return jsonify(ctx.analytics.daily_goal(user_id).to_dict())

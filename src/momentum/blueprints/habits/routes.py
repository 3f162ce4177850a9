"""Habit routes: creation, editing, completion logging and analytics views."""

from __future__ import annotations

from flask import jsonify, request

from ..utils import app_context, current_user_id, error_response, request_payload
from . import bp
from .forms import CalendarQuery, CompletionForm, CompletionRangeQuery, HabitForm, PeriodQuery


def _unknown_category(form: HabitForm, user_id: int):
    """Error response when the form points at a category the caller does not own."""

    if form.category_id is None:
        return None
    if app_context().category_repo.get_by_id(form.category_id, user_id=user_id) is not None:
        return None
    return error_response(
        400, "invalid_input", "Unknown category.", fields={"category_id": ["Unknown category."]}
    )


def _habit_not_found(habit_id: int):
    return error_response(404, "habit_not_found", f"Habit {habit_id} not found.")


@bp.get("/")
def list_habits():
    """List the caller's habits, newest first."""

    user_id = current_user_id()
    habits = app_context().habit_repo.list_all(user_id=user_id)
    return jsonify([habit.model_dump(mode="json") for habit in habits])


@bp.post("/")
def create_habit():
    user_id = current_user_id()
    form = HabitForm.model_validate(request_payload())
    invalid = _unknown_category(form, user_id)
    if invalid is not None:
        return invalid
    habit = app_context().habit_repo.create(form.to_habit(user_id=user_id), user_id=user_id)
    return jsonify(habit.model_dump(mode="json")), 201


@bp.put("/<int:habit_id>")
def update_habit(habit_id: int):
    """Replace a habit's editable fields."""

    user_id = current_user_id()
    form = HabitForm.model_validate(request_payload())
    repo = app_context().habit_repo
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        return _habit_not_found(habit_id)
    invalid = _unknown_category(form, user_id)
    if invalid is not None:
        return invalid
    habit = repo.update(form.apply_to(habit), user_id=user_id)
    return jsonify(habit.model_dump(mode="json"))


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    user_id = current_user_id()
    if not app_context().habit_repo.delete(habit_id, user_id=user_id):
        return _habit_not_found(habit_id)
    return jsonify({"message": "Habit deleted"})


@bp.post("/<int:habit_id>/complete")
def complete_habit(habit_id: int):
    """Record a completion, for today unless ``completed_date`` is given."""

    user_id = current_user_id()
    form = CompletionForm.model_validate(request_payload())
    ctx = app_context()
    day = form.completed_date or ctx.analytics.today()
    completion = ctx.habit_repo.add_completion(habit_id, day, user_id=user_id)
    return jsonify(completion.model_dump(mode="json")), 201


@bp.get("/<int:habit_id>/completions")
def list_completions(habit_id: int):
    """Raw completion rows inside ``start_date``..``end_date``, newest first."""

    user_id = current_user_id()
    query = CompletionRangeQuery.model_validate(request.args.to_dict())
    repo = app_context().habit_repo
    if repo.get_by_id(habit_id, user_id=user_id) is None:
        return _habit_not_found(habit_id)
    rows = repo.get_completions(habit_id, query.start_date, query.end_date, user_id=user_id)
    rows.sort(key=lambda row: (row.completed_date, row.id), reverse=True)
    return jsonify([row.model_dump(mode="json") for row in rows])


@bp.delete("/<int:habit_id>/complete/<int:completion_id>")
def delete_completion(habit_id: int, completion_id: int):
    user_id = current_user_id()
    removed = app_context().habit_repo.delete_completion(
        completion_id, habit_id=habit_id, user_id=user_id
    )
    if not removed:
        return error_response(404, "completion_not_found", f"Completion {completion_id} not found.")
    return jsonify({"message": "Completion deleted"})


@bp.get("/<int:habit_id>/streak")
def habit_streak(habit_id: int):
    user_id = current_user_id()
    streak = app_context().analytics.compute_streak(habit_id, user_id=user_id)
    return jsonify(streak.to_dict())


@bp.get("/<int:habit_id>/calendar")
def habit_calendar(habit_id: int):
    """Month grid for a habit; defaults to the current month."""

    user_id = current_user_id()
    analytics = app_context().analytics
    today = analytics.today()
    query = CalendarQuery.model_validate(
        {
            "year": request.args.get("year", today.year),
            "month": request.args.get("month", today.month),
        }
    )
    month = analytics.project_calendar(habit_id, query.year, query.month, user_id=user_id)
    return jsonify(month.to_dict())


@bp.get("/stats")
def user_statistics():
    """Completion rate, best streak and top habits for a period."""

    user_id = current_user_id()
    analytics = app_context().analytics
    query = PeriodQuery.model_validate(request.args.to_dict())
    if query.start is None:
        stats = analytics.month_statistics(user_id)
    else:
        stats = analytics.compute_user_statistics(user_id, query.start, query.end)
    return jsonify(stats.to_dict())

"""Category routes."""

from __future__ import annotations

from flask import jsonify

from ..utils import app_context, current_user_id, error_response, request_payload
from . import bp
from .forms import CategoryForm, CategoryUpdateForm


def _category_not_found(category_id: int):
    return error_response(404, "category_not_found", f"Category {category_id} not found.")


@bp.get("/")
def list_categories():
    user_id = current_user_id()
    categories = app_context().category_repo.list_all(user_id=user_id)
    return jsonify([category.model_dump(mode="json") for category in categories])


@bp.post("/")
def create_category():
    user_id = current_user_id()
    form = CategoryForm.model_validate(request_payload())
    category = app_context().category_repo.create(
        form.to_category(user_id=user_id), user_id=user_id
    )
    return jsonify(category.model_dump(mode="json")), 201


@bp.put("/<int:category_id>")
def update_category(category_id: int):
    user_id = current_user_id()
    form = CategoryUpdateForm.model_validate(request_payload())
    repo = app_context().category_repo
    category = repo.get_by_id(category_id, user_id=user_id)
    if category is None:
        return _category_not_found(category_id)
    category = repo.update(form.apply_to(category), user_id=user_id)
    return jsonify(category.model_dump(mode="json"))


@bp.delete("/<int:category_id>")
def delete_category(category_id: int):
    """Delete a category; habits that used it keep existing without one."""

    user_id = current_user_id()
    if not app_context().category_repo.delete(category_id, user_id=user_id):
        return _category_not_found(category_id)
    return jsonify({"message": "Category deleted"})

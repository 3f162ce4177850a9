"""Momentum habit analytics application factory."""

from __future__ import annotations

from datetime import date
from importlib import import_module
from typing import Callable, Iterable, Optional

from flask import Flask
from pydantic import ValidationError

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context
from .errors import HabitNotFoundError, MalformedDateError
from .logging_config import get_logger, setup_logging
from .services.dates import DateLike

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "momentum.blueprints.habits"
    yield "momentum.blueprints.goals"
    yield "momentum.blueprints.categories"


def create_app(
    config_name: str | None = None,
    *,
    config: Optional[BaseConfig] = None,
    clock: Callable[[], DateLike] = date.today,
) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["MOMENTUM_CONFIG"] = config_obj

    setup_logging(config_obj)
    app.extensions["momentum"] = create_app_context(config_obj, clock=clock)

    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    logger.info("Application created", extra={"database_url": config_obj.DATABASE_URL})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    from .blueprints.utils import error_response, validation_errors

    @app.errorhandler(ValidationError)
    def _invalid_input(exc: ValidationError):
        return error_response(
            400, "invalid_input", "Request validation failed.", fields=validation_errors(exc)
        )

    @app.errorhandler(MalformedDateError)
    def _malformed_date(exc: MalformedDateError):
        return error_response(400, "malformed_date", str(exc))

    @app.errorhandler(HabitNotFoundError)
    def _habit_not_found(exc: HabitNotFoundError):
        return error_response(404, "habit_not_found", f"Habit {exc.habit_id} not found.")


__all__ = [
    "AppContext",
    "BaseConfig",
    "DevConfig",
    "TestConfig",
    "create_app",
    "create_app_context",
]

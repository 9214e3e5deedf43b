import logging
import os
from typing import Any

from flask import Flask

from .capability import EXTENSION_KEY, attach_radio_buttons
from .config import ENV_DIAGNOSTICS
from .errors import (
    InvalidChoiceError,
    OptionsConfigurationError,
    RadioButtonsConfigurationError,
    RadioButtonsError,
)
from .extensions import db, migrate
from .logging_config import configure_logging
from .services.options_registry import OptionsDeclaration, OptionsRegistry
from .services.radio_button_service import RadioButtonProvider, RadioButtonSet

logger = logging.getLogger(__name__)

__all__ = [
    "create_app",
    "attach_radio_buttons",
    "db",
    "migrate",
    "InvalidChoiceError",
    "OptionsConfigurationError",
    "OptionsDeclaration",
    "OptionsRegistry",
    "RadioButtonProvider",
    "RadioButtonSet",
    "RadioButtonsConfigurationError",
    "RadioButtonsError",
]


def create_app(config: dict[str, Any] | None = None, registry: OptionsRegistry | None = None) -> Flask:
    app = Flask(__name__)
    os.makedirs(app.instance_path, exist_ok=True)

    _load_base_config(app, config)

    db.init_app(app)
    migrate.init_app(app, db)
    from . import models  # noqa: F401  # ensure models registered for Alembic

    _init_registry(app, registry)
    configure_logging(app)

    from .management import register_commands

    register_commands(app)
    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    app.config.from_object("radio_buttons.config.Config")
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    if config and "DATABASE_URL" in config:
        app.config["SQLALCHEMY_DATABASE_URI"] = config["DATABASE_URL"]


def _init_registry(app: Flask, registry: OptionsRegistry | None) -> None:
    if registry is None:
        source = app.config.get("RADIO_BUTTONS_OPTIONS_PATH")
        registry = OptionsRegistry(os.path.abspath(source) if source else None)
    app.extensions[EXTENSION_KEY] = registry

"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from orderdesk.core.clock import Clock
from orderdesk.core.config import BaseConfig, get_config
from orderdesk.core.logger import configure_logging
from orderdesk.core.logger import init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object, import path, or ``None`` to select by ``APP_ENV``.
    :param clock: Clock registered for services; defaults to the system clock.
        Tests pass a :class:`~orderdesk.core.clock.FrozenClock`.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from orderdesk.core import proxy

    proxy.init_app(app)

    from orderdesk.core import extensions

    if clock is not None:
        app.extensions[extensions.CLOCK_KEY] = clock
    extensions.init_app(app)

    init_logging(app)

    from orderdesk.core import cors

    cors.init_app(app)

    from orderdesk.api import init_app as init_api

    init_api(app)

    from orderdesk.core import errors

    errors.init_app(app)

    return app

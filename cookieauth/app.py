# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from cookieauth.infrastructure.container import Container
from cookieauth.shared.config import AppConfig, load_config
from cookieauth.shared.logging import logger, setup_logging
from cookieauth.shared.middleware.error_handler import configure_error_handling
from cookieauth.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)
    setup_logging(
        level="DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    # Flask's own signed-session cookie must not shadow ours.
    app.config["SESSION_COOKIE_NAME"] = f"{config.session.cookie_name}_flask"
    app.extensions["cookieauth"] = container

    configure_request_logging(app, config)
    configure_error_handling(app, config)
    app.register_blueprint(container.auth_controller.as_blueprint())

    logger.info(
        f"app: ready env={config.app_env} max_session_age={config.session.max_age}s "
        f"hash_method={container.password_hasher.method.split(':')[0]}"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080)

"""Flask application factory."""
from __future__ import annotations

import atexit
import logging
from typing import Optional

from flask import Flask

from .routes.api import api_bp
from .services import Session, SessionBuilder, SessionConfig

logger = logging.getLogger(__name__)


def create_app(session: Optional[Session] = None) -> Flask:
    app = Flask(__name__)

    if session is None:
        config = SessionConfig.from_env()
        session = SessionBuilder.from_config(config).build()
        atexit.register(session.close)
        logger.info("cookie session backed by %s", config.cookie_store_path or "memory only")

    app.config["COOKIE_SESSION"] = session

    app.register_blueprint(api_bp)

    return app

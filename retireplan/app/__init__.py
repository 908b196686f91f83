"""Application factory and app-wide configuration."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from retireplan.app.api.routes import api_bp
from retireplan.config import Config


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Settings come from ``Config``, then ``RETIREPLAN_*`` environment variables
    (values parsed as JSON where possible), then ``overrides``.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("RETIREPLAN")
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = app.config["JSON_SORT_KEYS"]

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app

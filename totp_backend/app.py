"""
FLASK APP ENTRY POINT - TOTP VERIFICATION SERVER
================================================

Builds the Flask app, configures logging and CORS, registers the API
blueprint and the JSON error handlers.

    totp-lab-server                     # installed console script
    python -m totp_backend.app          # same thing

Default address: http://localhost:3001
"""

import logging
from typing import Mapping, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from totp_backend.config import get_config
from totp_backend.routes import internal_error, totp_bp

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """
    Root handler is installed once; later calls only adjust the level.

    Unknown level names fall back to INFO instead of stopping the server.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    numeric_level = logging.getLevelName(str(level).strip().upper())
    if not isinstance(numeric_level, int):
        root.setLevel(logging.INFO)
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r, using INFO", level)
        return
    root.setLevel(numeric_level)


def create_app(overrides: Optional[Mapping] = None) -> Flask:
    """
    Application factory.

    Arguments:
        overrides: config values applied on top of the environment config
            (e.g. {"APP_ENV": "production"} in tests)
    """
    app = Flask(__name__)

    config_name = (overrides or {}).get("APP_ENV")
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])

    # CORS: every origin in development, a single allowed origin in production
    if app.config["APP_ENV"] == "production":
        CORS(app, origins=[app.config["ALLOWED_ORIGIN"]])
    else:
        CORS(app)

    app.register_blueprint(totp_bp)
    _register_error_handlers(app)

    app.logger.debug("TOTP server configured (env=%s)", app.config["APP_ENV"])
    return app


def _register_error_handlers(app: Flask) -> None:

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code == 404:
            message = "Endpoint not found"
        else:
            message = e.description or e.name
        return jsonify({"success": False, "message": message}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception("Unhandled error: %s", e)
        return internal_error(e)


def main() -> None:
    app = create_app()
    app.logger.info("TOTP verification server on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["APP_ENV"] == "development",
    )


if __name__ == '__main__':
    main()

"""Flask application factory.

Wires the /api blueprint, CORS, per-request logging context and the JSON
error responses clients rely on:
- ValidationError -> 400 {"error": <message>}
- NotFoundError   -> 404 {"error": "event not found"}
- unknown route   -> 404 {"error": "Not found"}
- anything else   -> 500 {"error": "Server error"}
"""

import time
from typing import Optional

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound

from gateway.config.models import ServerConfig
from gateway.discovery.exceptions import NotFoundError, ValidationError
from gateway.discovery.service import DiscoveryService
from gateway.logging import get_logger
from gateway.logging.context import bind_request, pop_log_context

from .routes import create_blueprint

logger = get_logger(__name__, component="http")


def create_app(service: DiscoveryService, server_config: Optional[ServerConfig] = None) -> Flask:
    """Create the Flask application.

    Args:
        service: DiscoveryService handling every /api route
        server_config: CORS settings (defaults to allowing any origin)

    Returns:
        Configured Flask application
    """
    server_config = server_config or ServerConfig()

    app = Flask(__name__)
    app.json.sort_keys = False
    CORS(app, origins=server_config.cors_origins)

    app.register_blueprint(create_blueprint(service), url_prefix="/api")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.get("/favicon.ico")
    def favicon():
        return "", 204

    _register_request_logging(app)
    _register_error_handlers(app)

    return app


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def start_request():
        g.request_started = time.monotonic()
        g.log_token = bind_request(request.method, request.path)

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        duration_ms = round((time.monotonic() - started) * 1000, 1) if started else None
        logger.info(
            f"{request.method} {request.path} {response.status_code}",
            extra={
                "event": "http.request.completed",
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    @app.teardown_request
    def end_request(exc):
        token = g.pop("log_token", None)
        if token is not None:
            pop_log_context(token)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        logger.info(
            f"Rejected request: {e}",
            extra={"event": "http.request.invalid", "error": str(e)},
        )
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"error": "event not found"}), 404

    @app.errorhandler(NotFound)
    def handle_unknown_route(e: NotFound):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jsonify({"error": e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.error(
            f"Unhandled error: {e}",
            extra={"event": "http.request.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return jsonify({"error": "Server error"}), 500

"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify, request

from deeplx_bridge.logger import get_logger

from .routes.translate import translate_bp

logger = get_logger(__name__)

WELCOME_MESSAGE = (
    "Welcome to the DeepL Free API. Please POST to '/translate'. "
    "Visit 'https://github.com/guobao2333/DeepLX-Serverless' for more information."
)

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"


def build_app(settings: Dict[str, Any]) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Ensure JSON responses keep Unicode data.
    app.config["JSON_AS_ASCII"] = False
    app.json.ensure_ascii = False
    app.config["DEEPLX"] = settings

    register_cors(app, settings.get("cors_origin"))
    register_blueprints(app)
    register_default_routes(app)

    return app


def register_cors(app: Flask, origin: str | None) -> None:
    """Attach CORS headers to every response when an origin is configured."""
    if not origin:
        return

    logger.info("CORS enabled for origin: %s", origin)

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        return response


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(translate_bp)


def register_default_routes(app: Flask) -> None:
    """Register default health and index routes."""

    @app.get("/")
    def home():
        return jsonify({"code": 200, "message": WELCOME_MESSAGE})

    @app.get("/health")
    def health_check():
        logger.debug("Health check requested")
        return jsonify({"status": "ok"})

    @app.errorhandler(404)
    def page_not_found(e):
        logger.warning("%s %s | 404 | Not Found", request.method, request.path)
        return jsonify({"code": 404, "message": "Not Found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"code": 405, "message": "Method Not Allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error: %s", e)
        return jsonify({"code": 500, "message": "Internal server error"}), 500

"""Flask application configuration and blueprint registration."""

from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException, InternalServerError

from ohwan_link.config import ServerConfig
from ohwan_link.logger import get_logger
from ohwan_link.web.forwarding import ForwardingTable

from .routes.spa import spa_bp

logger = get_logger(__name__)


def build_app(config: ServerConfig, forwarding_table: ForwardingTable) -> Flask:
    """Create and configure the Flask application."""
    # The SPA blueprint serves the static root itself; disable Flask's /static route.
    app = Flask(__name__, static_folder=None)

    app.config["STATIC_ROOT"] = str(config.static_root.resolve())
    app.config["FORWARDING_TABLE"] = tuple(forwarding_table)

    if not config.static_root.is_dir():
        logger.warning(f"Static root does not exist: {config.static_root}")
    elif not (config.static_root / config.entry_document).is_file():
        logger.warning(f"Entry document not found: {config.static_root / config.entry_document}")

    register_blueprints(app)
    register_error_handlers(app)

    logger.debug(
        "Forwarding table: "
        + ", ".join(f"{rule.name} -> {rule.target}" for rule in app.config["FORWARDING_TABLE"])
    )
    return app


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    app.register_blueprint(spa_bp)


def _error_response(status: int, error: str):
    return jsonify({
        "status": status,
        "error": error,
        "path": request.path,
    }), status


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers."""

    @app.errorhandler(404)
    def page_not_found(e):
        logger.debug(f"Not found: {request.method} {request.path}")
        return _error_response(404, e.name)

    @app.errorhandler(500)
    def internal_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.error(
            f"Internal server error on {request.method} {request.path}: {original}",
            exc_info=original if isinstance(original, BaseException) else None,
        )
        return _error_response(500, InternalServerError().name)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return _error_response(e.code or 500, e.name)

"""Static asset serving with single-page app forwarding."""

from __future__ import annotations

import os

from flask import Blueprint, abort, current_app, request, send_from_directory
from werkzeug.security import safe_join

from ohwan_link.logger import get_logger
from ohwan_link.web.forwarding import match_forward

spa_bp = Blueprint("spa", __name__)
logger = get_logger(__name__)


def _static_file(static_root: str, path: str):
    """Return the filesystem path for ``path`` if it is a file under the root."""
    if not path:
        return None
    candidate = safe_join(static_root, path)
    if candidate is None or not os.path.isfile(candidate):
        return None
    return candidate


@spa_bp.get("/", defaults={"path": ""})
@spa_bp.get("/<path:path>")
def serve(path: str):
    """
    Serve a static file, or the entry document for forwarded routes.

    Static files take precedence over forwarding. The forward is internal:
    the response is the entry document with no redirect.
    """
    static_root = current_app.config["STATIC_ROOT"]

    if _static_file(static_root, path) is not None:
        logger.debug(f"Serving static file: {path}")
        return send_from_directory(static_root, path)

    rule = match_forward(request.path, current_app.config["FORWARDING_TABLE"])
    if rule is not None:
        logger.debug(f"Forwarding {request.path} to {rule.target} (rule: {rule.name})")
        return send_from_directory(static_root, rule.target)

    abort(404)

"""Route blueprints for the web application."""

from .spa import spa_bp

__all__ = [
    "spa_bp",
]

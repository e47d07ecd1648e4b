"""Web application package for Ohwan Link."""

from __future__ import annotations

from typing import Optional

from flask import Flask

from ohwan_link.config import ServerConfig, load_config
from ohwan_link.logger import configure_logging


def create_app(config: Optional[ServerConfig] = None, forwarding_table=None) -> Flask:
    """Application factory for the web interface."""
    if config is None:
        config = load_config()
    configure_logging(config.log_mode, config.log_file or "")

    from .app import build_app  # Import here to avoid circular imports
    from .forwarding import build_forwarding_table

    if forwarding_table is None:
        forwarding_table = build_forwarding_table(config.entry_document)
    return build_app(config, forwarding_table)


__all__ = ["create_app"]

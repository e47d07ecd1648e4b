"""Shared fixtures: a temporary static root and an app serving it."""

from pathlib import Path

import pytest

from ohwan_link.config import ServerConfig
from ohwan_link.web import create_app

INDEX_HTML = "<!DOCTYPE html><html><body><div id=\"root\"></div></body></html>\n"
APP_JS = "console.log('app');\n"


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "assets" / "app.js").write_text(APP_JS, encoding="utf-8")
    (root / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    # Matches the single-segment rule but exists on disk
    (root / "robots").write_text("User-agent: *\n", encoding="utf-8")
    return root


@pytest.fixture
def config(static_root: Path) -> ServerConfig:
    return ServerConfig(host="127.0.0.1", port=0, static_root=static_root, log_mode="off")


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def entry_body() -> bytes:
    return INDEX_HTML.encode("utf-8")

"""Project root entry point for launching the web server."""

from __future__ import annotations

import sys
from pathlib import Path


def _bootstrap_path() -> None:
    """Ensure the ohwan_link package is importable when running from project root."""
    project_root = Path(__file__).resolve().parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


def main():
    _bootstrap_path()
    from ohwan_link.web.server import main as serve

    sys.exit(serve())


if __name__ == "__main__":
    main()

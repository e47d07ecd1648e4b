"""
Embedded HTTP server for the web application.

Binds the listener explicitly, prints the startup banner and serves the
Flask app with Werkzeug's threaded WSGI server on a background thread.
"""

from __future__ import annotations

import signal
import socket
import sys
import threading
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.serving import get_sockaddr, make_server, select_address_family

from ohwan_link.config import DEFAULT_HOST, ServerConfig, load_config
from ohwan_link.exceptions import BindError, ServerError
from ohwan_link.logger import get_logger
from ohwan_link.web import create_app
from ohwan_link.web.forwarding import ForwardingRule

logger = get_logger(__name__)

BANNER_RULE = "=" * 49


def bind_socket(host: str, port: int) -> socket.socket:
    """Create a listening socket, raising OSError if the address cannot be bound."""
    family = select_address_family(host, port)
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(get_sockaddr(host, port, family))
        sock.listen()
    except OSError:
        sock.close()
        raise
    return sock


def print_banner(*lines: str) -> None:
    print(BANNER_RULE)
    for line in lines:
        print(f"  {line}")
    print(BANNER_RULE, flush=True)


class SpaServer:
    """A running (or runnable) HTTP listener for the SPA app."""

    def __init__(self, config: ServerConfig, forwarding_table: Optional[Iterable[ForwardingRule]] = None):
        self.config = config
        self.app = create_app(config, forwarding_table)
        self._server = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def port(self) -> int:
        """Bound port; differs from config.port when started on port 0."""
        if self._server is not None:
            return self._server.server_address[1]
        return self.config.port

    @property
    def url(self) -> str:
        return replace(self.config, port=self.port).access_url

    def start(self) -> "SpaServer":
        """
        Bind the listener and serve requests on a background thread.

        Raises:
            BindError: If the address is in use or cannot be bound
        """
        with self._lock:
            if self._server is not None:
                raise ServerError("Server is already running", code="already_running")

            host, port = self.config.host, self.config.port
            try:
                sock = bind_socket(host, port)
            except OSError as e:
                logger.error(f"Failed to bind {host}:{port}: {e.strerror or e}")
                raise BindError(host, port, e.strerror or str(e)) from e

            try:
                # make_server duplicates the descriptor
                self._server = make_server(host, port, self.app, threaded=True, fd=sock.fileno())
            finally:
                sock.close()

            self._thread = threading.Thread(
                target=self._server.serve_forever,
                name=f"spa-server-{self.port}",
                daemon=True,
            )
            self._thread.start()

        logger.info(f"Listening on {host}:{self.port}, serving {self.config.static_root}")
        print()
        print_banner("Application started successfully!", f"Access at: {self.url}")
        return self

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the serving thread exits."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)

    def stop(self) -> None:
        """Release the listener and print the shutdown banner. Safe to call twice."""
        with self._lock:
            server, thread = self._server, self._thread
            self._server = None
            self._thread = None
        if server is None:
            return

        server.shutdown()
        server.server_close()
        if thread is not None:
            thread.join()

        logger.info("Server stopped")
        print()
        print_banner("Application stopped.")

    def serve_forever(self) -> None:
        """Start, block until interrupted (Ctrl+C or SIGTERM), then stop."""
        self.start()
        previous = _install_sigterm_handler()
        try:
            while self._thread is not None and self._thread.is_alive():
                self.wait(0.5)
        except KeyboardInterrupt:
            logger.info("Shutdown requested")
        finally:
            self.stop()
            if previous is not None:
                signal.signal(signal.SIGTERM, previous)

    def __enter__(self) -> "SpaServer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


def _install_sigterm_handler():
    """Treat SIGTERM like Ctrl+C so the shutdown banner is printed."""
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)


def start(
    port: int,
    static_root,
    entry_document: str,
    patterns: Optional[Iterable[ForwardingRule]] = None,
    host: str = DEFAULT_HOST,
) -> SpaServer:
    """
    Start a server for ``static_root`` on ``port`` and return its handle.

    Args:
        port: TCP port to listen on (0 picks a free port)
        static_root: Directory holding the static assets
        entry_document: Document served for forwarded routes
        patterns: Forwarding table, defaults to the standard SPA rules

    Raises:
        BindError: If the port is unavailable
    """
    config = ServerConfig(
        host=host,
        port=port,
        static_root=Path(static_root),
        entry_document=entry_document,
    )
    return SpaServer(config, patterns).start()


def main() -> int:
    """Console entry point: load config, print the banner and serve until stopped."""
    try:
        config = load_config()
        print_banner(config.app_name)
        print()
        server = SpaServer(config)
        server.serve_forever()
    except ServerError as e:
        logger.error(f"Startup failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

"""
Server Exceptions

Exception classes shared by the configuration layer and the web server.
Kept in their own module to avoid circular imports between config.py and
the web package.
"""


class ServerError(Exception):
    """Server error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigError(ServerError):
    """Raised when the server configuration is invalid."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message, code="config_error", details={"key": key} if key else None)
        self.key = key


class BindError(ServerError):
    """Raised when the HTTP listener cannot bind its address."""

    def __init__(self, host: str, port: int, reason: str = None):
        message = f"Failed to bind {host}:{port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="bind_error", details={"host": host, "port": port})
        self.host = host
        self.port = port

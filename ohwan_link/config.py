"""Server configuration: defaults, optional JSON file, environment overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ohwan_link.exceptions import ConfigError
from ohwan_link.logger import LOG_MODES, get_logger

logger = get_logger(__name__)

APP_NAME = "Ohwan Link Web Application"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_ENTRY_DOCUMENT = "index.html"
DEFAULT_LOG_MODE = "info"

# Bundled assets ship inside the package
PACKAGE_DIR = Path(__file__).parent
DEFAULT_STATIC_ROOT = PACKAGE_DIR / "static"

# Resolved against the working directory at load time
CONFIG_DIR = Path("config")
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable -> config field. Earlier names win over later ones.
ENV_OVERRIDES = (
    ("SERVER_PORT", "port"),
    ("PORT", "port"),
    ("SERVER_ADDRESS", "host"),
    ("STATIC_ROOT", "static_root"),
    ("ENTRY_DOCUMENT", "entry_document"),
    ("LOG_MODE", "log_mode"),
    ("LOG_FILE", "log_file"),
)


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server settings, fixed for the lifetime of the process."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    static_root: Path = DEFAULT_STATIC_ROOT
    entry_document: str = DEFAULT_ENTRY_DOCUMENT
    app_name: str = APP_NAME
    log_mode: str = DEFAULT_LOG_MODE
    log_file: Optional[Path] = None

    @property
    def access_url(self) -> str:
        """URL printed in the startup banner."""
        host = self.host
        if host in ("0.0.0.0", "::", ""):
            host = "localhost"
        elif ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}"


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {value!r}", key="port")
    if not 0 <= port <= 65535:
        raise ConfigError(f"Port out of range: {port}", key="port")
    return port


def _parse_log_mode(value: Any) -> str:
    log_mode = str(value).strip().lower()
    if log_mode not in LOG_MODES:
        raise ConfigError(
            f"Invalid log mode: {value!r} (expected one of {', '.join(LOG_MODES)})",
            key="log_mode",
        )
    return log_mode


def _parse_entry_document(value: Any) -> str:
    entry = str(value).strip().lstrip("/")
    if not entry:
        raise ConfigError("Entry document must not be empty", key="entry_document")
    return entry


def _normalize(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert raw values (strings from env or JSON) into typed fields."""
    known = {f for f in ServerConfig.__dataclass_fields__}
    normalized: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        if key == "port":
            value = _parse_port(value)
        elif key == "log_mode":
            value = _parse_log_mode(value)
        elif key == "entry_document":
            value = _parse_entry_document(value)
        elif key == "static_root":
            value = Path(value).expanduser()
        elif key == "log_file":
            value = Path(value).expanduser() if value else None
        normalized[key] = value
    return normalized


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load raw settings from a JSON config file. A missing file yields {}."""
    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse config file {config_file}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_file}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_file} must contain a JSON object")
    logger.debug(f"Configuration loaded from {config_file}")
    return data


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> ServerConfig:
    """
    Build the server configuration.

    Priority (lowest to highest): built-in defaults, JSON config file,
    environment variables.

    Args:
        environ: Environment mapping, defaults to os.environ
        config_file: JSON file to read, defaults to OHWAN_CONFIG_FILE or config/config.json

    Raises:
        ConfigError: If any value is invalid
    """
    if environ is None:
        environ = os.environ
    if config_file is None:
        config_file = Path(environ["OHWAN_CONFIG_FILE"]) if environ.get("OHWAN_CONFIG_FILE") else CONFIG_FILE

    config = replace(ServerConfig(), **_normalize(load_config_file(Path(config_file))))

    overrides: Dict[str, Any] = {}
    for env_name, field_name in ENV_OVERRIDES:
        value = environ.get(env_name)
        if value is None or value.strip() == "" or field_name in overrides:
            continue
        overrides[field_name] = value.strip()
    if overrides:
        logger.debug(f"Environment overrides: {sorted(overrides)}")
        config = replace(config, **_normalize(overrides))

    return config

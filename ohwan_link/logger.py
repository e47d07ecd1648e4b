import logging
import os
from pathlib import Path
from typing import Optional

LOG_MODES = ("off", "info", "debug")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that follow the application's log mode
MANAGED_LOGGERS = ("werkzeug",)

# Cache for log settings to avoid repeated environment reads
_log_mode_cache = None
_log_file_cache = None


def _get_log_mode() -> str:
    """Get log mode, falling back to the LOG_MODE environment variable."""
    global _log_mode_cache
    if _log_mode_cache is not None:
        return _log_mode_cache

    log_mode = os.environ.get("LOG_MODE", "info").strip().lower()
    if log_mode not in LOG_MODES:
        log_mode = "info"
    _log_mode_cache = log_mode
    return log_mode


def _get_log_file() -> Optional[Path]:
    global _log_file_cache
    if _log_file_cache is not None:
        return _log_file_cache or None

    log_file = os.environ.get("LOG_FILE", "").strip()
    _log_file_cache = Path(log_file) if log_file else ""
    return _log_file_cache or None


def _levels_for(log_mode: str):
    """Return (logger level, console level) for a log mode."""
    if log_mode == "debug":
        return logging.DEBUG, logging.DEBUG
    if log_mode == "off":
        # Higher than CRITICAL disables everything
        return logging.CRITICAL + 1, logging.CRITICAL + 1
    return logging.INFO, logging.INFO


def _apply(logger: logging.Logger, log_mode: str, log_file: Optional[Path]) -> None:
    """Bring a logger"s level and handlers in line with the current settings."""
    level, console_level = _levels_for(log_mode)
    logger.setLevel(level)
    log_format = logging.Formatter(LOG_FORMAT)

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    wanted_file = log_mode != "off" and log_file is not None

    # Drop file handlers that point somewhere else or are no longer wanted
    for handler in file_handlers:
        if not wanted_file or handler.baseFilename != os.path.abspath(log_file):
            handler.close()
            logger.removeHandler(handler)

    if wanted_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        f_handler = logging.FileHandler(log_file, encoding="utf-8")
        f_handler.setLevel(logging.DEBUG)
        f_handler.setFormatter(log_format)
        logger.addHandler(f_handler)

    consoles = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not consoles:
        c_handler = logging.StreamHandler()
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)
        consoles = [c_handler]
    for handler in consoles:
        handler.setLevel(console_level)


def configure_logging(log_mode: str = None, log_file=None) -> None:
    """Set the log mode and update all loggers created by get_logger."""
    global _log_mode_cache, _log_file_cache
    if log_mode is not None:
        _log_mode_cache = log_mode if log_mode in LOG_MODES else "info"
    if log_file is not None:
        _log_file_cache = Path(log_file) if log_file else ""

    log_mode = _get_log_mode()
    log_file = _get_log_file()

    # Only touch loggers that have handlers (i.e. were created by get_logger)
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        if logger.handlers and logger_name.startswith("ohwan_link"):
            _apply(logger, log_mode, log_file)

    for logger_name in MANAGED_LOGGERS:
        _apply(logging.getLogger(logger_name), log_mode, log_file)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    _apply(logger, _get_log_mode(), _get_log_file())
    return logger

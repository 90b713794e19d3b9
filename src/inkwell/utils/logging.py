"""Logging for the generation service.

Every record carries the identity of the caller being served (``-`` outside a
request), so rate-limit decisions and provider failures in the rotating log
can be traced back to one client. Uvicorn's own loggers are routed through
the same handlers because the server is started with ``log_config=None``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator

__all__ = ["bind_identity", "current_identity", "get_log_path", "setup_logging"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(identity)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILENAME = "inkwell.log"
_NO_IDENTITY = "-"
_SERVER_LOGGERS: tuple[str, ...] = ("uvicorn", "uvicorn.error", "uvicorn.access")
_QUIET_LOGGERS: tuple[str, ...] = ("asyncio", "httpx", "httpcore", "openai", "uvicorn.access")

_identity: ContextVar[str] = ContextVar("inkwell_log_identity", default=_NO_IDENTITY)
_log_path: Path | None = None


class IdentityFilter(logging.Filter):
    """Stamp each record with the caller identity bound to the current context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "identity"):
            record.identity = _identity.get()
        return True


@contextmanager
def bind_identity(identity: str) -> Iterator[None]:
    """Attach ``identity`` to every record logged inside the block."""

    token = _identity.set(identity or _NO_IDENTITY)
    try:
        yield
    finally:
        _identity.reset(token)


def current_identity() -> str:
    return _identity.get()


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Install the rotating file handler (and a console handler) on the root logger.

    Calling again without ``force`` keeps the existing configuration.
    """

    global _log_path
    if _log_path is not None and not force:
        return _log_path

    directory = Path(log_dir or os.environ.get("INKWELL_LOG_DIR") or Path.home() / ".inkwell" / "logs")
    directory = directory.expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / _LOG_FILENAME

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=_DATE_FORMAT)
    identity_filter = IdentityFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(identity_filter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    _route_server_loggers()
    _quiet_libraries(level)

    _log_path = path
    return path


def get_log_path() -> Path | None:
    """Return the active log file, or ``None`` before :func:`setup_logging`."""

    return _log_path


def _route_server_loggers() -> None:
    # uvicorn installs no handlers of its own when log_config is None
    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        for handler in list(server_logger.handlers):
            server_logger.removeHandler(handler)
        server_logger.propagate = True


def _quiet_libraries(root_level: int) -> None:
    quiet_level = max(root_level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

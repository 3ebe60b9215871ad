"""Logging setup for the storefront processes (API, CLI, management).

Standard library handlers carry the output; structlog shapes it. The first
domain module imported calls `configure_logging`; later calls do nothing, so
the API, the CLI and the test suite all end up with one configuration.

Environment:
    LOG_LEVEL   explicit level, wins over everything else
    LOG_DIR     when set, rotating ``vitrine.log`` / ``vitrine_error.log`` files
    PROTEAN_ENV picks the default level and the renderer
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Chatty libraries underneath the adapters and repositories
_QUIET_LOGGERS = ("urllib3", "requests", "protean", "sqlalchemy.engine", "httpx")

_MAX_BYTES = 10 * 1024 * 1024

_configured = False


def _environment() -> str:
    return (os.getenv("PROTEAN_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(_environment(), "INFO")).upper()


def _rotating(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(filename=path, maxBytes=_MAX_BYTES, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str, log_dir: str | None = None, prefix: str = "vitrine") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [logging.StreamHandler(sys.stderr)]

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        root.addHandler(_rotating(directory / f"{prefix}.log", level))
        root.addHandler(_rotating(directory / f"{prefix}_error.log", logging.ERROR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_structlog(json_output: bool) -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str | None = None) -> bool:
    """Configure logging once per process. Returns False when it was already configured."""
    global _configured
    if _configured:
        return False

    setup_stdlib_logging(level or get_log_level(), log_dir=log_dir if log_dir is not None else os.getenv("LOG_DIR"))
    setup_structlog(json_output=_environment() in ("production", "staging"))
    _configured = True
    return True


def bind_request(method: str, path: str) -> None:
    """Tag every log line emitted while serving one HTTP request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path)

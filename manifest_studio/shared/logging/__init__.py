"""Structured logging: structlog on top of the stdlib logging tree."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

# httpx logs every request at INFO; keep it quiet unless debugging
_NOISY_LOGGERS = ("httpx", "httpcore", "PIL")


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _file_handler(file_path: str, max_mb: int, backups: int) -> logging.Handler | None:
    path = Path(file_path.strip()).resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=max_mb * 1024 * 1024,
            backupCount=backups,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Log file disabled: could not open {path}: {e}\n")
        return None


def setup_logging(
    level: str = "INFO",
    file_path: str = "",
    rotation_max_mb: int = 5,
    rotation_backups: int = 3,
    json_output: bool | None = None,
) -> None:
    """Route structlog and stdlib loggers through one formatter.

    JSON lines by default; DEBUG switches to the console renderer unless
    json_output says otherwise. With file_path set, records are also written
    to a rotating file.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = log_level != logging.DEBUG

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path and file_path.strip():
        handler = _file_handler(file_path, rotation_max_mb, rotation_backups)
        if handler is not None:
            handlers.append(handler)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root.addHandler(handler)

    quiet_level = logging.DEBUG if log_level == logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

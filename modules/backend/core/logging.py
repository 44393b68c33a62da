"""
Centralized Logging Configuration.

All modules log through structlog, rendered by the stdlib handlers set up
here. Settings come from config/settings/logging.yaml (LoggingSchema);
arguments to setup_logging override them.

Every record carries timestamp, level, logger, event, func_name and
lineno. Inside an HTTP request the middleware also binds request_id,
method, path and source="web". CLI commands bind source="cli".

Usage:
    from modules.backend.core.logging import get_logger, setup_logging

    setup_logging()
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Project created", extra={"project_id": project.id})

The JSON file handler, when enabled, writes one record per line to the
configured path (logs/system.jsonl by default).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from modules.backend.core.config import find_project_root, get_app_config
from modules.backend.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "api",
    "internal",
    "unknown",
})
"""Values used for the ``source`` field. Always set by the caller."""

# Third-party loggers held at WARNING regardless of the configured level
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def _get_logging_config() -> LoggingSchema:
    return get_app_config().logging


def _resolve_log_path(configured_path: str) -> Path:
    """Resolve the log file path relative to project root."""
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    """Processors applied to structlog and foreign (stdlib) records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(config: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Replaces any handlers already on the root logger, so it can be
    called again (e.g. by the CLI after parsing --debug).

    Args:
        level: Log level name. Overrides config.
        format_type: 'json' or 'console'. Overrides config. The file
            handler always writes JSON.
        enable_console: Whether to log to stdout. Overrides config.
        enable_file_logging: Whether to write the JSONL file. Overrides config.
    """
    config = _get_logging_config()
    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    if format_type == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(config.handlers.file, json_formatter))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Use this outside of HTTP request context (CLI commands, maintenance jobs).

    Example:
        log_with_source(logger, "cli", "info", "Tags reconciled", user_id="abc")
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)

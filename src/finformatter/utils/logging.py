"""Structured logging for the CLI and the analysis core."""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import structlog

from finformatter.utils.text_utils import mask_secret

LOG_FILE_NAME = "finformatter.log"
LOG_RETENTION_DAYS = 14

# Event keys whose values are credentials
SECRET_FIELDS = frozenset({"api_key", "google_api_key", "authorization", "key"})

# Provider SDKs log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "google_genai")


def mask_credentials(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Processor that masks credential values, including one level of nesting.

    Provider entries are sometimes logged as dicts, so nested mappings are
    checked as well.
    """
    for field, value in event_dict.items():
        if field in SECRET_FIELDS and isinstance(value, str):
            event_dict[field] = mask_secret(value)
        elif isinstance(value, dict):
            event_dict[field] = {
                k: mask_secret(v) if k in SECRET_FIELDS and isinstance(v, str) else v
                for k, v in value.items()
            }
    return event_dict


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
    log_dir: Optional[Path] = None,
) -> None:
    """Configure structlog on top of the standard logging module.

    Console output goes to stderr so previews written to stdout can be piped.
    Calling this again replaces the previous handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Console output format ("json" or "console")
        log_dir: If given, events are also written to ``finformatter.log`` in
            this directory, rotated daily.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        mask_credentials,
    ]

    if log_format == "json":
        # Paper text is often Chinese; keep it readable in the output
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper()))

    handlers = [_console_handler(renderer, shared_processors)]
    if log_dir:
        handlers.append(_file_handler(Path(log_dir), shared_processors))
    for handler in handlers:
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _console_handler(renderer: Any, shared_processors: list) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    )
    return handler


def _file_handler(log_dir: Path, shared_processors: list) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=log_dir / LOG_FILE_NAME,
        when="midnight",
        interval=1,
        backupCount=LOG_RETENTION_DAYS,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=shared_processors,
        )
    )
    return handler


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)

"""Logging configuration for MetalLB migration (stderr console + optional file)."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.stdlib import BoundLogger, LoggerFactory, ProcessorFormatter

LOG_FILE_NAME = "metallb_migrate.log"


def setup_logging(
    log_level: str | None = None,
    log_dir: Path | str | None = None,
    max_file_size_mb: int = 10,
) -> None:
    """Setup logging: console on stderr, plus a JSON file when ``log_dir`` is given.

    Stdout is reserved for rendered resources, so the console handler writes
    to stderr.

    Args:
        log_level: Log level (defaults to LOG_LEVEL env var or INFO)
        log_dir: Directory for the log file, no file logging if None
        max_file_size_mb: Max file size before truncation (no backup files kept)
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    log_level_num = getattr(logging, log_level.upper(), logging.INFO)

    # Clear any existing handlers to prevent duplicates
    logging.getLogger().handlers.clear()

    renderer = (
        structlog.dev.ConsoleRenderer()
        if sys.stderr.isatty()
        else structlog.processors.JSONRenderer()
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level_num)
    console_handler.setFormatter(ProcessorFormatter(processor=renderer))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_num)
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=0,  # Don't keep old files, just truncate
            encoding="utf-8",
        )
        file_handler.setLevel(log_level_num)
        file_handler.setFormatter(ProcessorFormatter(processor=structlog.processors.JSONRenderer()))
        root_logger.addHandler(file_handler)

    # Integrate with stdlib handlers so file and console both receive events
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("metallb_migrate")
    logger.debug(
        "Logging system initialized",
        log_level=log_level,
        log_file=str(log_file) if log_file else None,
    )


def get_logger() -> Any:
    """Get the application logger."""
    return structlog.get_logger("metallb_migrate")

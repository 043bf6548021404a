"""Structured logging configuration for Task Tracker"""
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple, Type, Union

ROOT_LOGGER_NAME = 'task_tracker'


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Additional context fields
        for key in ['title', 'operation', 'duration_ms', 'tasks_file', 'count']:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        original = record.levelname
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_dir: Optional[Path] = None,
    json_output: bool = False,
    console_output: bool = True
) -> logging.Logger:
    """
    Setup application logging

    Args:
        level: Logging level (int or level name)
        log_dir: Directory for JSON log files (used only with json_output)
        json_output: Write JSON lines to log_dir (ignored when log_dir is None)
        console_output: Enable console logging on stderr

    Returns:
        Configured application logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    # Console goes to stderr so listings on stdout stay clean
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if json_output and log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        json_file = log_dir / f'task_tracker_{datetime.now():%Y%m%d}.log'
        file_handler = logging.FileHandler(json_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger with the given name"""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


class LogTimer:
    """
    Context manager for logging operation duration.

    Exceptions listed in `expected` are user-facing rejections: they are
    logged once at WARNING instead of ERROR and still propagate.
    """

    def __init__(self, logger: logging.Logger, operation: str,
                 expected: Tuple[Type[BaseException], ...] = (), **extra):
        self.logger = logger
        self.operation = operation
        self.expected = expected
        self.extra = extra
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"Starting: {self.operation}", extra=self.extra)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        extra = {**self.extra, 'duration_ms': round(duration_ms, 2), 'operation': self.operation}

        if exc_type and issubclass(exc_type, self.expected):
            self.logger.warning(
                f"Rejected: {self.operation}: {exc_val}",
                extra=extra
            )
        elif exc_type:
            self.logger.error(
                f"Failed: {self.operation} ({duration_ms:.0f}ms): {exc_val}",
                extra=extra
            )
        else:
            self.logger.info(
                f"Completed: {self.operation} ({duration_ms:.0f}ms)",
                extra=extra
            )

        return False  # Don't suppress exceptions

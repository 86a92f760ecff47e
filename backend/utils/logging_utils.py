"""
Structured Logging Utilities

Provides logging set-up for the service and utilities for adding structured
context to log messages, improving observability and debugging.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional
from contextvars import ContextVar
from functools import wraps

from constants import LogConfig


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Handlers installed by configure_logging, removed again on reconfiguration
_installed_handlers: List[logging.Handler] = []


class RequestContextFilter(logging.Filter):
    """Stamps every record with the current request id ('-' outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'request_id'):
            record.request_id = _logging_context.get().get('request_id', '-')
        return True


def configure_logging(level: str = "INFO", log_dir=None) -> None:
    """
    Configure the root logger with a console handler and, when log_dir is
    given, a rotating file handler.

    Safe to call more than once; handlers from an earlier call are replaced.

    Args:
        level: Root log level name
        log_dir: Directory for backend.log, or None for console only
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    log_formatter = logging.Formatter(LogConfig.FORMAT)
    context_filter = RequestContextFilter()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.addFilter(context_filter)
    _installed_handlers.append(console_handler)

    # File handler with rotation (10MB per file, keep 5 backups)
    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LogConfig.FILE_NAME
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LogConfig.MAX_BYTES,
            backupCount=LogConfig.BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler.addFilter(context_filter)
        _installed_handlers.append(file_handler)

    root_logger.setLevel(level)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info(f"Logging initialized: {log_file or 'console only'}")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("User created", extra={
            "user_id": user.id,
            "operation": "create_user",
        })
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge the request-scoped context with extra."""
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log messages
    within the current context (typically a request).

    Example:
        set_logging_context(request_id="abc-123", user_id=42)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    A user_id keyword argument, or a user_id as the first positional
    argument after self, is added to the context.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("delete_user")
        def delete_user(self, user_id: int):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            if "user_id" in kwargs:
                context["user_id"] = kwargs["user_id"]
            elif len(args) > 1 and isinstance(args[1], int):
                context["user_id"] = args[1]

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
                logger.info(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

        return wrapper

    return decorator

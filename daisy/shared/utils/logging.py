# 📄 File: daisy/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a logging system that records what the Daisy client does
# (logins, uploads, recognition progress) in a structured way so it is easy to debug.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting, contextual information and timing of
# backend calls, shared by every module of the client.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Per-task context tracking

# 🔄 Connected Modules / Calls From:
# Used by: RemoteGateway, backend adapters, ExecutionPoller, DocumentSearch,
# Supabase client manager

import asyncio
import functools
import logging
import os
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

# Context variables for call tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}

SERVICE_NAME = 'daisy-client'


class ContextualFormatter(logging.Formatter):
    """
    Formatter that adds contextual information to log records.

    Adds request ID, user ID and host information to every log message
    for better traceability.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'
        self.service_name = SERVICE_NAME

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = self.service_name
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Flattens the ``extra_fields`` attached by StructuredLogger into the
    JSON document next to the contextual fields.
    """

    def __init__(self):
        super().__init__('%(levelname)s %(name)s %(message)s')
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if request_id_var.get():
            log_record['request_id'] = request_id_var.get()
        if user_id_var.get():
            log_record['user_id'] = user_id_var.get()

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record['extra'] = extra_fields


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Accepts an ``extra`` dict (or keyword arguments) on every call and
    attaches it to the record as ``extra_fields``.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        """Log debug message with extra fields."""
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        """Log info message with extra fields."""
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        """Log warning message with extra fields."""
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        """Log error message with extra fields."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def log(self, level: int, message: str, extra: Dict = None, **kwargs):
        self._log(level, message, extra, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in ['exc_info', 'stack_info', 'stacklevel']:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items()
                        if k in ['exc_info', 'stack_info', 'stacklevel']}

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)

    def log_backend_call(
        self,
        service: str,
        operation: str,
        duration_ms: float,
        success: bool,
        extra: Dict = None
    ):
        """Log a single backend call with its timing."""
        extra_fields = {
            'event_type': 'backend_call',
            'service': service,
            'operation': operation,
            'duration_ms': round(duration_ms, 2),
            'success': success,
            **(extra or {})
        }

        level = logging.INFO if success else logging.WARNING
        self._log(
            level,
            f"Backend {service}.{operation} - {'ok' if success else 'failed'} - {duration_ms:.2f}ms",
            extra_fields
        )


def setup_logging(
    log_level: str = None,
    log_format: str = None,
    log_file: str = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure the root logger once.

    Falls back to INFO/json when settings cannot be loaded (for example
    when SUPABASE_URL is not configured yet).
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("daisy")

    try:
        from daisy.shared.config.settings import get_settings
        settings = get_settings()
        log_level = log_level or settings.LOG_LEVEL
        log_format = log_format or settings.LOG_FORMAT
        log_file = log_file or settings.LOG_FILE
    except Exception:
        log_level = log_level or 'INFO'
        log_format = log_format or 'json'

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("daisy")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger

    return logger


@contextmanager
def log_context(request_id: str = None, user_id: str = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Identifier of the current gateway call
        user_id: Identifier of the signed-in user
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {
            'request_id': request_id,
            'user_id': user_id,
        }
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def log_backend_call(service: str, operation: Optional[str] = None):
    """
    Decorator timing a coroutine that talks to the backend.

    Each call runs inside ``log_context`` so every record it emits carries
    a request id. Success is logged through ``log_backend_call``; failures
    are logged and re-raised unchanged.
    """
    def decorator(func):
        if not asyncio.iscoroutinefunction(func):
            raise TypeError("log_backend_call only decorates coroutine functions")

        name = operation or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            # Nested calls keep the request id of the outermost call
            with log_context(
                request_id=request_id_var.get() or None,
                user_id=user_id_var.get() or None,
            ):
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    duration = (time.perf_counter() - start_time) * 1000
                    logger.log_backend_call(
                        service, name, duration, success=False,
                        extra={'error': str(e), 'error_type': type(e).__name__}
                    )
                    raise
                duration = (time.perf_counter() - start_time) * 1000
                logger.log_backend_call(service, name, duration, success=True)
                return result

        return wrapper

    return decorator


__all__ = [
    'StructuredLogger',
    'JSONFormatter',
    'ContextualFormatter',
    'setup_logging',
    'get_logger',
    'log_context',
    'log_backend_call',
    'request_id_var',
    'user_id_var',
]

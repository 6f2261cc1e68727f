"""
Shared utilities for the Daisy client: structured logging and text/file helpers.
"""

from .logging import get_logger, setup_logging, log_context, log_backend_call
from .helpers import (
    generate_id,
    remove_accents,
    normalize_keyword,
    safe_filename,
    resolve_filename,
    resolve_mime_type,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_context",
    "log_backend_call",
    "generate_id",
    "remove_accents",
    "normalize_keyword",
    "safe_filename",
    "resolve_filename",
    "resolve_mime_type",
]

"""Shared utility modules for caching and logging"""

from .cache import SessionResultCache, session_key_for, DEFAULT_SESSION_KEY
from .logging import (
    setup_logging,
    get_logger,
    get_contextual_logger,
    log_with_data,
    JSONFormatter,
    ConsoleFormatter,
)

__all__ = [
    # Cache utilities
    'SessionResultCache',
    'session_key_for',
    'DEFAULT_SESSION_KEY',
    # Logging utilities
    'setup_logging',
    'get_logger',
    'get_contextual_logger',
    'log_with_data',
    'JSONFormatter',
    'ConsoleFormatter',
]

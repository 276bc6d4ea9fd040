"""
Logging for the Hedera agent.

File logs are JSON lines. The tool call context attached by the dispatcher
and the tools (`tool`, `tool_call_id`, `session`) is written as top-level
keys, so one call can be followed from the dispatcher through the tool to the
ledger client. Any other structured data goes under `data`.

Console output goes to stderr: stdout carries the MCP stdio transport.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import settings

LOG_FILE = "hedera_agent.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Context keys promoted to top-level JSON fields
CONTEXT_FIELDS = ('tool', 'tool_call_id', 'session')


def _record_data(record: logging.LogRecord) -> Dict[str, Any]:
    return dict(getattr(record, 'extra_fields', None) or {})


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with tool call context as first-class keys."""

    def format(self, record: logging.LogRecord) -> str:
        data = _record_data(record)
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            entry[name] = data.pop(name, None)
        if data:
            entry['data'] = data
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output; tool call context is appended in brackets."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname, '')
        when = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        line = f"{color}{record.levelname:<7}{self.RESET} {when} {record.name}: {record.getMessage()}"

        data = _record_data(record)
        context = [f"{name}={data[name]}" for name in CONTEXT_FIELDS if data.get(name)]
        if context:
            line += f" [{' '.join(context)}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    log_file: str = LOG_FILE,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the root logger with a rotating JSON file and a stderr console.

    Args:
        level: Log level name (default: LOG_LEVEL setting)
        log_dir: Directory for the log file (default: LOG_DIR setting)
        log_file: Log file name
        console: Also log to stderr

    Returns:
        The root logger
    """
    level = (level or settings.log_level).upper()
    numeric_level = getattr(logging, level, logging.INFO)

    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / log_file

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding='utf-8'
    )
    file_handler.setFormatter(JSONFormatter())
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ConsoleFormatter())
        root.addHandler(console_handler)

    root.info(f"Logging to {path} at {level}")
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class ToolCallLogger(logging.LoggerAdapter):
    """Adapter that stamps every record with a fixed tool call context."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.setdefault('extra', {})
        extra['extra_fields'] = {**dict(self.extra or {}), **extra.get('extra_fields', {})}
        return msg, kwargs


def get_contextual_logger(name: str, **context: Any) -> ToolCallLogger:
    """
    Logger bound to a tool call context.

    Example:
        call_logger = get_contextual_logger(__name__, tool=call.name, tool_call_id=call.id)
    """
    return ToolCallLogger(logging.getLogger(name), context)


def log_with_data(logger: logging.Logger, level: str, message: str, **data: Any) -> None:
    """Log `message` with structured fields (context keys become top-level JSON keys)."""
    getattr(logger, level.lower())(message, extra={'extra_fields': data})

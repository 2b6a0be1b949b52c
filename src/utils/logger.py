"""
Logging Utility
Structured logging for the scheduling assistant function.
Emits JSON lines on serverless platforms and a readable format locally.
"""

import logging
import json
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from config.settings import LOGGING_CONFIG

# Request context shared by every logger; set once by the handler per invocation
_request_context: ContextVar[dict] = ContextVar("request_context", default={})


def _running_serverless() -> bool:
    return any(os.getenv(marker) for marker in LOGGING_CONFIG["serverless_env_markers"])


class JSONFormatter(logging.Formatter):
    """
    Formats each record as a single JSON object so the platform's
    log search can filter on fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        if getattr(record, 'extra_data', None):
            log_entry['data'] = record.extra_data

        # default=str keeps non-JSON values (exceptions, objects) from breaking the log line
        return json.dumps(log_entry, default=str)


class ContextLogger:
    """
    Logger wrapper that accepts structured keyword data and carries
    the current request context (action, request id) into every record,
    whichever module logs it.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self._configure()

    def _configure(self) -> None:
        """Attach a stdout handler once per named logger."""
        if self.logger.handlers:
            return

        level_name = LOGGING_CONFIG["default_level"]
        self.logger.setLevel(getattr(logging, level_name, logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.logger.level)

        if _running_serverless():
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(
                LOGGING_CONFIG["local_format"],
                datefmt=LOGGING_CONFIG["local_date_format"]
            ))

        self.logger.addHandler(handler)

    def set_context(self, **kwargs) -> 'ContextLogger':
        """
        Add fields included in every following record, from any logger,
        until cleared.
        Returns:
            self for chaining
        """
        _request_context.set({**_request_context.get(), **kwargs})
        return self

    def clear_context(self) -> None:
        _request_context.set({})

    def _log(
        self,
        level: int,
        message: str,
        data: Optional[dict] = None,
        exc_info: bool = False
    ) -> None:
        extra_data = {**_request_context.get()}
        if data:
            extra_data.update(data)

        self.logger.log(
            level,
            message,
            exc_info=exc_info or None,
            extra={'extra_data': extra_data} if extra_data else {}
        )

    def debug(self, message: str, **data) -> None:
        self._log(logging.DEBUG, message, data)

    def info(self, message: str, **data) -> None:
        self._log(logging.INFO, message, data)

    def warning(self, message: str, **data) -> None:
        self._log(logging.WARNING, message, data)

    def error(self, message: str, exc_info: bool = False, **data) -> None:
        """
        Log an error.
        Args:
            message: Error message
            exc_info: If True, attach the active exception's traceback
            **data: Additional structured data
        """
        self._log(logging.ERROR, message, data, exc_info=exc_info)


def get_logger(name: str) -> ContextLogger:
    """
    Get a configured logger instance.
    Example:
        logger = get_logger(__name__)
        logger.set_context(action='chat')
        logger.info("Calling OpenAI", message_length=12)
    """
    return ContextLogger(name)

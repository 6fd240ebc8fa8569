"""
Logging utilities for the global table custom resource.
"""

import logging
import json
import sys
from typing import Any, Dict, Optional
from datetime import datetime, timezone


# Context attributes copied from a record onto the JSON entry when present
CONTEXT_FIELDS = (
    'table_name',
    'region',
    'request_type',
    'request_id',
    'error_code',
    'status',
    'attempt',
)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Get configured logger instance."""
    logger = logging.getLogger(name)
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Avoid adding multiple handlers, but honour a changed level on warm starts
    if logger.handlers:
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    logger.setLevel(log_level)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


class ResourceLogger:
    """Logger bound to the table, region and request being processed."""

    def __init__(
        self,
        name: str,
        level: str = "INFO",
        table_name: Optional[str] = None,
        region: Optional[str] = None,
        request_type: Optional[str] = None,
        request_id: Optional[str] = None
    ):
        self.logger = get_logger(name, level)
        self.table_name = table_name
        self.region = region
        self.request_type = request_type
        self.request_id = request_id

    def bind(self, **context) -> "ResourceLogger":
        """Return a copy of this logger with extra context fields set."""
        return ResourceLogger(
            self.logger.name,
            level=logging.getLevelName(self.logger.level),
            table_name=context.get('table_name', self.table_name),
            region=context.get('region', self.region),
            request_type=context.get('request_type', self.request_type),
            request_id=context.get('request_id', self.request_id)
        )

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Add resource context to log entry."""
        context = {}
        if self.table_name:
            context['table_name'] = self.table_name
        if self.region:
            context['region'] = self.region
        if self.request_type:
            context['request_type'] = self.request_type
        if self.request_id:
            context['request_id'] = self.request_id
        if extra:
            context.update(extra)
        return context

    def info(self, message: str, **kwargs):
        """Log info message with context."""
        self.logger.info(message, extra=self._add_context(kwargs))

    def warning(self, message: str, exc_info=False, **kwargs):
        """Log warning message with context."""
        self.logger.warning(message, exc_info=exc_info, extra=self._add_context(kwargs))

    def error(self, message: str, exc_info=False, **kwargs):
        """Log error message with context."""
        self.logger.error(message, exc_info=exc_info, extra=self._add_context(kwargs))

    def log_api_call(self, operation: str, region: str, response: Optional[Dict[str, Any]] = None):
        """Log a completed DynamoDB API call with its HTTP status."""
        metadata = (response or {}).get('ResponseMetadata', {})
        self.info(
            f"DynamoDB call completed: {operation}",
            region=region,
            status=metadata.get('HTTPStatusCode')
        )

"""Logging configuration for the blob upload notifier."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Literal

from .context import get_log_context

LogFormat = Literal["json", "key-value"]

SERVICE_NAME = "blob-upload-notifier"


class ContextualFilter(logging.Filter):
    """Filter that enriches log records with static metadata and active context.

    This filter merges:
    1. Static fields (service, environment) into every record
    2. Active context from LogContextVar (invocation_id, blob_name, ...)
    3. Any additional 'extra' fields passed to the log call
    """

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        """Initialize contextual filter.

        Args:
            service: Service name (static field)
            environment: Environment label (production, staging, local)
        """
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        """Enrich record with static metadata and active context.

        Args:
            record: Log record to enrich

        Returns:
            True (always allow record to pass)
        """
        record.service = self.service
        record.environment = self.environment

        # Explicit extras win over context
        context = get_log_context()
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Produces single-line JSON objects with stable field names.
    Automatically includes all extra fields and context variables.
    """

    # Standard log record attributes to exclude from extras
    STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "asctime",
        "exc_info", "exc_text", "stack_info", "taskName"
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with all fields
        """
        log_obj: Dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in self.STANDARD_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, datetime):
                log_obj[key] = value.isoformat()
            elif isinstance(value, (str, int, float, bool, type(None), list, dict)):
                log_obj[key] = value
            else:
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)

    def _format_timestamp(self, created: float) -> str:
        """Format timestamp as ISO-8601 UTC with millisecond precision and 'Z' suffix."""
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class KeyValueFormatter(logging.Formatter):
    """Key-value formatter for human-readable logs.

    Produces logs in format:
    timestamp [level] logger: message key1=value1 key2=value2
    """

    SKIP_ATTRS = JSONFormatter.STANDARD_ATTRS | {"service", "environment"}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as key-value pairs.

        Args:
            record: Log record to format

        Returns:
            Human-readable log line with key=value pairs
        """
        base = super().format(record)

        extras = []
        for key, value in sorted(record.__dict__.items()):
            if key in self.SKIP_ATTRS or key.startswith("_"):
                continue
            extras.append(f"{key}={self._format_value(value)}")

        if extras:
            return f"{base} {' '.join(extras)}"
        return base

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, str):
            # Quote strings with spaces or separators
            if " " in value or "=" in value or "," in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, bool):
            return str(value).lower()
        if value is None:
            return "null"
        return str(value)


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
    replace_handlers: bool = True,
) -> None:
    """
    Configure the root logger with the specified level and format.

    Inside the Functions host the worker owns the root handlers and forwards
    records to the host; pass ``replace_handlers=False`` there so those
    handlers are kept and only gain the contextual filter.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' for JSON logs or 'key-value' for human-readable
        environment: Environment label (production, staging, local)
        replace_handlers: Install a stdout handler instead of the existing ones

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value"):
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    contextual_filter = ContextualFilter(service=SERVICE_NAME, environment=environment)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if replace_handlers:
        handler = logging.StreamHandler(sys.stdout)
        if format_type == "json":
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = KeyValueFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        handler.setFormatter(formatter)
        handler.addFilter(contextual_filter)

        root_logger.handlers.clear()
        root_logger.addHandler(handler)
    else:
        for existing in root_logger.handlers:
            # Avoid stacking filters when the worker re-imports the app
            for old_filter in [f for f in existing.filters if isinstance(f, ContextualFilter)]:
                existing.removeFilter(old_filter)
            existing.addFilter(contextual_filter)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
            "replace_handlers": replace_handlers,
        },
    )

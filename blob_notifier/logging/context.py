"""Context propagation for structured logging.

Fields pushed here (invocation id, blob name) are copied onto every log
record emitted while they are active. The state lives in a ContextVar, so
concurrent invocations handled by the same worker never see each other's
fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional


LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields active in the current context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the current logging context.

    Args:
        **kwargs: Fields to add; existing keys are overwritten

    Returns:
        Token for restoring the previous context with pop_log_context()

    Example:
        >>> token = push_log_context(invocation_id="5f1c", blob_name="report.pdf")
        >>> # ... every log line now carries both fields ...
        >>> pop_log_context(token)
    """
    current = LogContextVar.get()
    return LogContextVar.set({**current, **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context saved by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Mostly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(blob_name="report.pdf"):
        ...     logger.info("Processing upload")  # includes blob_name
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False

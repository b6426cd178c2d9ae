"""Structured logging helpers distilled into tiny orchestration phrases.

Purpose
    Keep every emission of logging data predictable and contextual without
    forcing applications to adopt a specific logging backend. Secret values
    never pass through these helpers; events carry namespaces, keys counts and
    platform names only.

Contents
    - ``TRACE_ID``: context variable storing the active trace identifier.
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``configure_logging``: attaches a stderr handler for CLI diagnostics.
    - ``bind_trace_id``: binds or clears the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured entries via a
      single private emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by adapters, the merge engine and the composition root so all
    diagnostics carry the same trace metadata.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("shh_env_trace_id", default=None)
"""Current trace identifier propagated through logging helpers."""

_LOGGER: Final[logging.Logger] = logging.getLogger("shh_env")
_LOGGER.addHandler(logging.NullHandler())

_CLI_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s %(context)s"


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers.

    Why
        Leaves the package silent by default while giving host applications
        full control over handler and formatter configuration.
    """

    return _LOGGER


def configure_logging(level: str | int) -> logging.Handler:
    """Attach a stderr handler at *level* to the package logger and return it.

    Why
        The CLI honours ``SHH_ENV_LOG_LEVEL`` for troubleshooting enumeration
        on unfamiliar platforms. Library consumers should configure logging
        themselves instead.

    Examples
    --------
    >>> handler = configure_logging("DEBUG")
    >>> get_logger().level == logging.DEBUG
    True
    >>> get_logger().removeHandler(handler)
    """

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_CLI_FORMAT, defaults={"context": {}}))
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(level)
    return handler


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error log entry that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(namespace: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build a structured logging payload for namespace lifecycle events.

    Examples
    --------
    >>> make_event('app::dev', {'keys': 3})
    {'namespace': 'app::dev', 'keys': 3}
    """

    event: dict[str, Any] = {"namespace": namespace}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context

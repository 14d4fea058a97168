"""Ambient ``info``/``debug`` logging and per-case log capture.

Test bodies and hooks call :func:`info` and :func:`debug` without being handed
anything. The executor installs a :class:`LogCapture` around each case; the
active capture lives in a context variable, so every asyncio task sees its own
capture and concurrently running cases never write into each other's buffer.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from bough.models.suite import LogLevel, LogStatement

logger = logging.getLogger(__name__)

_current_capture: ContextVar[Optional["LogCapture"]] = ContextVar(
    "bough_current_capture", default=None
)


class LogCapture:
    """Collects log statements emitted while a single case runs."""

    def __init__(self) -> None:
        self._messages: list[LogStatement] = []

    def emit(self, level: LogLevel, message: str) -> None:
        self._messages.append(LogStatement(level=level, message=str(message)))

    @property
    def messages(self) -> tuple[LogStatement, ...]:
        return tuple(self._messages)


@contextmanager
def capture_logs() -> Iterator[LogCapture]:
    """Install a fresh capture for the duration of the block, then restore the previous one."""
    capture = LogCapture()
    token = _current_capture.set(capture)
    try:
        yield capture
    finally:
        _current_capture.reset(token)


def current_capture() -> Optional[LogCapture]:
    return _current_capture.get()


def info(message: str) -> None:
    """Record an info message against the running case. No-op outside a case."""
    _emit(LogLevel.INFO, message)


def debug(message: str) -> None:
    """Record a debug message against the running case. No-op outside a case."""
    _emit(LogLevel.DEBUG, message)


def _emit(level: LogLevel, message: str) -> None:
    capture = _current_capture.get()
    if capture is None:
        logger.debug("Dropped %s message outside a test case: %s", level.value, message)
        return
    capture.emit(level, message)

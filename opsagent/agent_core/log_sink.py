from __future__ import annotations

"""Bounded operator log.

``LogSink`` is the append-only text stream the engine and the control surface
write operator-facing events to. It keeps only the most recent ``capacity``
lines; older lines are dropped silently. Nothing in the engine reads it back.

Lines carry their severity by convention:

- a leading ``>`` marks a system/progress event,
- ``ERROR`` / ``WARNING`` anywhere in the line mark the severity.

Every appended line is mirrored to the module logger at the matching level.
"""

import logging
from collections import deque
from typing import Deque, List, Sequence

from .schemas.domain import LogLevel

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
INITIAL_LINES = ("> System initialized.", "> Waiting for user command...")

_LOGGING_LEVELS = {
    LogLevel.system: logging.INFO,
    LogLevel.info: logging.INFO,
    LogLevel.warning: logging.WARNING,
    LogLevel.error: logging.ERROR,
}


def classify(line: str) -> LogLevel:
    if line.startswith(">"):
        return LogLevel.system
    if "ERROR" in line:
        return LogLevel.error
    if "WARNING" in line:
        return LogLevel.warning
    return LogLevel.info


class LogSink:
    """In-memory ring of the most recent operator log lines."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, initial: Sequence[str] = INITIAL_LINES) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._lines: Deque[str] = deque(maxlen=capacity)
        for line in initial:
            self._lines.append(line)

    @property
    def capacity(self) -> int:
        return self._lines.maxlen or 0

    def append(self, line: str) -> None:
        self._lines.append(line)
        logger.log(_LOGGING_LEVELS[classify(line)], line)

    def lines(self) -> List[str]:
        return list(self._lines)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)

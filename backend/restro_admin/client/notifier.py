"""User-facing notifications for the activity log browser (toasts, status bars, logs)."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class Notifier(Protocol):
    def notify(self, level: str, message: str) -> None: ...


class LoggingNotifier:
    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def notify(self, level: str, message: str) -> None:
        self._log.log(_LEVELS.get(level, logging.INFO), message)


class RecordingNotifier:
    """Keeps every notification until `clear()`; a UI drains it to render toasts."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def clear(self) -> None:
        self.messages.clear()

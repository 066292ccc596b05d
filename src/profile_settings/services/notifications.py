"""Transient user-facing notifications."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

_logger = logging.getLogger(__name__)


class NotificationLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A one-shot message for the user."""

    level: NotificationLevel
    message: str


class Notifier(Protocol):
    """Channel that delivers transient notifications to the UI."""

    def notify(self, notification: Notification) -> None:
        """Deliver a notification."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier that writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        """Log the notification at a level matching its severity."""
        if notification.level is NotificationLevel.ERROR:
            _logger.warning("Notification: %s", notification.message)
        else:
            _logger.info("Notification: %s", notification.message)


def notify_success(notifier: Notifier, message: str) -> None:
    notifier.notify(Notification(level=NotificationLevel.SUCCESS, message=message))


def notify_error(notifier: Notifier, message: str) -> None:
    notifier.notify(Notification(level=NotificationLevel.ERROR, message=message))

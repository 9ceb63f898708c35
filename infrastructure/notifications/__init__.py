"""Session event notifiers."""

from infrastructure.notifications.logging_notifier import LoggingSessionNotifier

__all__ = ["LoggingSessionNotifier"]

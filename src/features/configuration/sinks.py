"""Reference notification and theme sinks.

Used when the store runs without a UI, e.g. from the CLI, and by tests.
"""

import structlog

from src.features.configuration.constants import COMPONENT_CONFIG_STORE
from src.features.configuration.models import DarkMode, Notification, Severity


logger = structlog.get_logger()


class LoggingNotificationSink:
    """Writes notifications to the log and keeps them in order."""

    def __init__(self) -> None:
        self._history: list[Notification] = []
        self._log = logger.bind(component=COMPONENT_CONFIG_STORE, sink="notify")

    @property
    def history(self) -> list[Notification]:
        """Get all notifications emitted so far."""
        return list(self._history)

    def notify(
        self,
        message: str,
        caption: str | None,
        severity: Severity,
        rich_formatting: bool = False,
    ) -> None:
        """Record and log a notification.

        Args:
            message: Message body; may span several lines.
            caption: Optional caption.
            severity: Notification severity.
            rich_formatting: Whether the message carries markup.
        """
        notification = Notification(
            message=message,
            caption=caption,
            severity=severity,
            rich_formatting=rich_formatting,
        )
        self._history.append(notification)

        log_method = (
            self._log.warning if severity == Severity.NEGATIVE else self._log.info
        )
        log_method(
            "notification",
            caption=caption,
            message=message,
            severity=severity.value,
        )


class RecordingThemeSink:
    """Keeps style variables and dark mode in memory."""

    def __init__(self) -> None:
        self.style_variables: dict[str, str] = {}
        self.dark_mode: DarkMode | None = None
        self.calls: list[tuple[str, str]] = []

    def set_style_variable(self, name: str, value: str) -> None:
        self.style_variables[name] = value
        self.calls.append((name, value))

    def set_dark_mode(self, mode: DarkMode) -> None:
        self.dark_mode = mode
        self.calls.append(("dark_mode", mode.value))

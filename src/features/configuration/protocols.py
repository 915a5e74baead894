"""Protocol interfaces for the collaborators of the configuration store."""

from typing import Protocol, runtime_checkable

from src.features.configuration.models import DarkMode, Severity
from src.features.transport.models import TransportResponse


@runtime_checkable
class Transport(Protocol):
    """Protocol for the HTTP primitive used to reach the authority."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
    ) -> TransportResponse:
        """Issue a request against the authority.

        Args:
            method: HTTP method.
            path: Path relative to the authority's base URL.
            json: Optional body, sent as JSON.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: If the authority could not be reached.
            UnknownError: On any other failure.
        """
        ...


@runtime_checkable
class NotificationSink(Protocol):
    """Protocol for displaying messages to the user."""

    def notify(
        self,
        message: str,
        caption: str | None,
        severity: Severity,
        rich_formatting: bool = False,
    ) -> None:
        """Display a message."""
        ...


@runtime_checkable
class ThemeSink(Protocol):
    """Protocol for applying visual settings to the running UI."""

    def set_style_variable(self, name: str, value: str) -> None:
        """Assign a named style variable."""
        ...

    def set_dark_mode(self, mode: DarkMode) -> None:
        """Set the dark-mode tri-state."""
        ...

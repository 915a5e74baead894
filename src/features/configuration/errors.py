"""Error types for the configuration store."""

from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from src.features.configuration.models import ValidationDetail


class ConfigStoreErrorClass(str, Enum):
    """Classification of configuration store errors.

    - TRANSPORT: The authority could not be reached or answered non-2xx
    - PARSE: A response body did not have the expected shape
    - VALIDATION: The authority rejected a submitted configuration
    - UNKNOWN: Anything else, surfaced with its textual description
    """

    TRANSPORT = "TRANSPORT"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    UNKNOWN = "UNKNOWN"


class ConfigStoreError(Exception):
    """Base exception for configuration store errors.

    Provides structured error information for logging and notifications.
    """

    def __init__(
        self,
        error_class: ConfigStoreErrorClass,
        message: str,
        details: dict[str, str | int | None] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | None]]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class TransportError(ConfigStoreError):
    """Network or connection failure reaching the authority.

    Also raised for non-2xx answers on load requests.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
    ) -> None:
        """Initialize the transport error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code if a response was received.
            path: Request path that failed.
        """
        details: dict[str, str | int | None] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if path is not None:
            details["path"] = path

        super().__init__(
            error_class=ConfigStoreErrorClass.TRANSPORT,
            message=message,
            details=details,
        )
        self.status_code = status_code
        self.path = path


class ParseError(ConfigStoreError):
    """Response body could not be interpreted as the expected shape."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the parse error.

        Args:
            message: Human-readable error message.
            path: Request path whose body failed to parse.
        """
        super().__init__(
            error_class=ConfigStoreErrorClass.PARSE,
            message=message,
            details={"path": path} if path is not None else None,
        )
        self.path = path


class ConfigRejectedError(ConfigStoreError):
    """The authority explicitly rejected a submitted configuration."""

    def __init__(self, details: "list[ValidationDetail]") -> None:
        """Initialize the rejection error.

        Args:
            details: Per-field validation details from the authority.
        """
        super().__init__(
            error_class=ConfigStoreErrorClass.VALIDATION,
            message=f"Configuration rejected with {len(details)} errors",
            details={"detail_count": len(details)},
        )
        self.validation_details = list(details)


class UnknownError(ConfigStoreError):
    """Any other failure."""

    def __init__(self, message: str) -> None:
        super().__init__(error_class=ConfigStoreErrorClass.UNKNOWN, message=message)

"""Data models for the configuration store."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.features.configuration.errors import ParseError


class ThemeMode(str, Enum):
    """UI theme selection stored in the configuration."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class DarkMode(str, Enum):
    """Dark-mode tri-state understood by the theme sink."""

    OFF = "off"
    ON = "on"
    AUTO = "auto"


class Severity(str, Enum):
    """Notification severity."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    WARNING = "warning"
    INFO = "info"


class UiSettings(BaseModel):
    """The ``uisettings`` group of the configuration.

    Only the fields the client applies itself are typed here; anything else
    the authority sends is kept as an extra field.
    """

    model_config = ConfigDict(extra="allow")

    PRIMARY_COLOR: str = "#196cb0"
    SECONDARY_COLOR: str = "#b8124f"
    theme: ThemeMode | None = None


class Configuration(BaseModel):
    """Application configuration as served by the authority.

    The ``uisettings`` group is typed; every other group is opaque to the
    client and round-tripped unchanged.
    """

    model_config = ConfigDict(extra="allow")

    uisettings: UiSettings = Field(default_factory=UiSettings)

    @classmethod
    def from_payload(cls, payload: object, path: str | None = None) -> "Configuration":
        """Validate a decoded response body as a configuration.

        Args:
            payload: Decoded JSON body.
            path: Request path the body came from, for error reporting.

        Returns:
            Validated configuration.

        Raises:
            ParseError: If the body does not have the configuration shape.
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            msg = f"Invalid configuration: {e.error_count()} errors ({e.errors()[0]['msg']})"
            raise ParseError(msg, path=path) from e

    def to_payload(self) -> dict[str, object]:
        """Serialize to the JSON wire body.

        Only received or edited fields are written, so a document from the
        authority round-trips unchanged. Edits inside a defaulted
        ``uisettings`` group are still written.
        """
        payload = self.model_dump(mode="json", exclude_unset=True)
        if "uisettings" not in payload:
            uisettings = self.uisettings.model_dump(mode="json", exclude_unset=True)
            if uisettings:
                payload["uisettings"] = uisettings
        return payload


class ValidationDetail(BaseModel):
    """One per-field error from the authority's rejection response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: Annotated[tuple[str, ...], Field(alias="loc")]
    message: Annotated[str, Field(alias="msg")]

    @field_validator("location", mode="before")
    @classmethod
    def coerce_segments(cls, v: object) -> object:
        """Render numeric path segments (list indexes) as strings."""
        if isinstance(v, list | tuple):
            return tuple(str(segment) for segment in v)
        return v


class RejectionBody(BaseModel):
    """Body of a non-2xx answer to a save request."""

    detail: list[ValidationDetail]


class Notification(BaseModel):
    """A user-visible message emitted by the store."""

    model_config = ConfigDict(frozen=True)

    message: str
    caption: str | None = None
    severity: Severity = Severity.INFO
    rich_formatting: bool = False

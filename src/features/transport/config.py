"""Configuration models for the HTTP transport."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransportConfig(BaseModel):
    """Connection settings for the configuration authority."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = "http://localhost:8000"
    timeout_seconds: Annotated[float, Field(ge=0.1, le=300.0)] = 10.0
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        "configstore-client/1.0"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers added to every request"
    )

    @field_validator("base_url")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        """Ensure base_url is an HTTP(S) URL."""
        if not v.startswith(("http://", "https://")):
            msg = f"base_url must start with http:// or https://, got {v!r}"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("headers")
    @classmethod
    def validate_no_auth_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure no credential headers are stored in config."""
        forbidden = {"authorization", "cookie", "x-api-key"}
        for key in v:
            if key.lower() in forbidden:
                msg = f"Header '{key}' must not be stored in transport config"
                raise ValueError(msg)
        return v

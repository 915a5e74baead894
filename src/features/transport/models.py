"""Data models for the HTTP transport."""

import json
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.features.configuration.errors import ParseError


HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300


class TransportResponse(BaseModel):
    """Response received from the authority.

    Carries the status and the raw body; decoding is left to the caller.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100, le=599, description="HTTP status code")
    path: Annotated[str, Field(min_length=1, description="Request path")]
    headers: dict[str, str] = Field(
        default_factory=dict, description="Response headers"
    )
    body_bytes: bytes = Field(default=b"", description="Response body")

    @property
    def ok(self) -> bool:
        """Check if the status is 2xx."""
        return HTTP_STATUS_OK_MIN <= self.status_code < HTTP_STATUS_OK_MAX

    def json(self) -> object:
        """Decode the body as JSON.

        Returns:
            Decoded body.

        Raises:
            ParseError: If the body is not valid JSON.
        """
        try:
            return json.loads(self.body_bytes)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            msg = f"Response body is not valid JSON: {e}"
            raise ParseError(msg, path=self.path) from e

"""Outcome types of a save request."""

from pydantic import BaseModel, ConfigDict

from src.features.configuration.errors import ConfigStoreErrorClass
from src.features.configuration.models import ValidationDetail


class SaveAccepted(BaseModel):
    """The authority persisted the configuration.

    ``reloaded`` is False when the follow-up reload failed and the held
    copy is the one that was submitted.
    """

    model_config = ConfigDict(frozen=True)

    reloaded: bool = True


class SaveRejected(BaseModel):
    """The authority rejected the configuration with per-field details."""

    model_config = ConfigDict(frozen=True)

    details: tuple[ValidationDetail, ...]


class SaveFailed(BaseModel):
    """The save could not be completed."""

    model_config = ConfigDict(frozen=True)

    error_class: ConfigStoreErrorClass
    description: str


SaveResult = SaveAccepted | SaveRejected | SaveFailed

"""Client-side configuration store: load, save and apply."""

from src.features.configuration.errors import (
    ConfigRejectedError,
    ConfigStoreError,
    ConfigStoreErrorClass,
    ParseError,
    TransportError,
    UnknownError,
)
from src.features.configuration.models import (
    Configuration,
    DarkMode,
    Notification,
    Severity,
    ThemeMode,
    UiSettings,
    ValidationDetail,
)
from src.features.configuration.results import (
    SaveAccepted,
    SaveFailed,
    SaveRejected,
    SaveResult,
)
from src.features.configuration.state_machine import LoadState, LoadStateError
from src.features.configuration.store import ConfigurationStore


__all__ = [
    # Store
    "ConfigurationStore",
    "LoadState",
    "LoadStateError",
    # Models
    "Configuration",
    "UiSettings",
    "ThemeMode",
    "DarkMode",
    "Severity",
    "Notification",
    "ValidationDetail",
    # Results
    "SaveAccepted",
    "SaveRejected",
    "SaveFailed",
    "SaveResult",
    # Errors
    "ConfigStoreError",
    "ConfigStoreErrorClass",
    "TransportError",
    "ParseError",
    "ConfigRejectedError",
    "UnknownError",
]

"""Constants for the configuration store."""

from typing import Final


# Profiles served by the authority
PROFILE_CURRENT: Final[str] = "current"
PROFILE_CURRENT_ACTIVE: Final[str] = "currentActive"

# Endpoints
BOOTSTRAP_PATH: Final[str] = f"/api/config/{PROFILE_CURRENT_ACTIVE}"
ADMIN_CONFIG_PATH_TEMPLATE: Final[str] = "/api/admin/config/{profile}"
ADMIN_SAVE_PATH: Final[str] = f"/api/admin/config/{PROFILE_CURRENT}"

# Style variables pushed to the theme sink
STYLE_VAR_PRIMARY: Final[str] = "primary"
STYLE_VAR_SECONDARY: Final[str] = "secondary"

# Joins the location segments of a validation detail
LOCATION_SEPARATOR: Final[str] = "→"

# Notification texts
CAPTION_GET_FAILED: Final[str] = "Error getting config!"
CAPTION_BOOTSTRAP_FAILED: Final[str] = "Error loading config!"
CAPTION_SAVE_FAILED: Final[str] = "Error saving config"
CAPTION_VALIDATION_ERROR: Final[str] = "Configuration Validation Error"
MSG_SAVE_OK: Final[str] = (
    "Configuration successfully persisted. "
    "To apply hardware settings changed, restart the app!"
)

# Logging
COMPONENT_CONFIG_STORE: Final[str] = "config_store"

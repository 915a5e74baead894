"""Projection of configuration UI settings onto the theme sink."""

import structlog

from src.features.configuration.constants import (
    COMPONENT_CONFIG_STORE,
    STYLE_VAR_PRIMARY,
    STYLE_VAR_SECONDARY,
)
from src.features.configuration.metrics import ConfigStoreMetrics
from src.features.configuration.models import DarkMode, ThemeMode
from src.features.configuration.protocols import ThemeSink
from src.features.configuration.state import ConfigurationState


logger = structlog.get_logger()


def dark_mode_for(theme: ThemeMode | str | None) -> DarkMode:
    """Map a configured theme to the dark-mode tri-state.

    Args:
        theme: Theme value from ``uisettings.theme``; may be absent.

    Returns:
        AUTO for ``system``, ON for ``dark``, OFF for anything else.
    """
    if theme == ThemeMode.SYSTEM:
        return DarkMode.AUTO
    if theme == ThemeMode.DARK:
        return DarkMode.ON
    return DarkMode.OFF


class ThemeApplier:
    """Pushes the visual settings of the held configuration to the UI."""

    def __init__(self, state: ConfigurationState, sink: ThemeSink) -> None:
        """Initialize the applier.

        Args:
            state: Shared configuration holder.
            sink: Theme sink of the running UI.
        """
        self._state = state
        self._sink = sink
        self._metrics = ConfigStoreMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_CONFIG_STORE)

    def post_init_store(self) -> None:
        """Apply colors and dark mode from ``uisettings``.

        Safe to call repeatedly; every call assigns the same variables.
        """
        uisettings = self._state.configuration.uisettings
        self._sink.set_style_variable(STYLE_VAR_PRIMARY, uisettings.PRIMARY_COLOR)
        self._sink.set_style_variable(STYLE_VAR_SECONDARY, uisettings.SECONDARY_COLOR)

        dark_mode = dark_mode_for(uisettings.theme)
        self._sink.set_dark_mode(dark_mode)

        self._metrics.record_theme_applied()
        self._log.debug(
            "theme_applied",
            primary=uisettings.PRIMARY_COLOR,
            secondary=uisettings.SECONDARY_COLOR,
            dark_mode=dark_mode.value,
        )

"""Configuration store facade."""

from src.features.configuration.constants import PROFILE_CURRENT
from src.features.configuration.loader import ConfigLoader
from src.features.configuration.models import Configuration
from src.features.configuration.persister import ConfigPersister
from src.features.configuration.protocols import (
    NotificationSink,
    ThemeSink,
    Transport,
)
from src.features.configuration.results import SaveResult
from src.features.configuration.state import ConfigurationState
from src.features.configuration.state_machine import LoadState
from src.features.configuration.theme import ThemeApplier


class ConfigurationStore:
    """Single holder of the client's configuration for one session.

    Wires the shared ConfigurationState to its loader, persister and
    theme applier. Construct one at session start and pass it to whatever
    needs the configuration.
    """

    def __init__(
        self,
        transport: Transport,
        notifications: NotificationSink,
        theme_sink: ThemeSink,
    ) -> None:
        """Initialize the store.

        Args:
            transport: HTTP primitive used to reach the authority.
            notifications: Sink for user-visible messages.
            theme_sink: Sink for style variables and dark mode.
        """
        self._state = ConfigurationState()
        self._theme = ThemeApplier(self._state, theme_sink)
        self._loader = ConfigLoader(
            self._state, transport, notifications, self._theme
        )
        self._persister = ConfigPersister(
            self._state, transport, notifications, self._loader, self._theme
        )

    @property
    def state(self) -> ConfigurationState:
        """Get the shared configuration holder."""
        return self._state

    @property
    def configuration(self) -> Configuration:
        """Get the held configuration, editable in place."""
        return self._state.configuration

    @property
    def load_state(self) -> LoadState:
        return self._state.load_state

    @property
    def is_loaded(self) -> bool:
        return self._state.is_loaded

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    async def get_config(self, profile: str = PROFILE_CURRENT) -> bool:
        """Load a named profile; see ``ConfigLoader.get_config``."""
        return await self._loader.get_config(profile)

    async def init_store(self, force_reload: bool = False) -> None:
        """Bootstrap the configuration; see ``ConfigLoader.init_store``."""
        await self._loader.init_store(force_reload=force_reload)

    async def save_config(self) -> SaveResult:
        """Persist the held configuration; see ``ConfigPersister.save_config``."""
        return await self._persister.save_config()

    def post_init_store(self) -> None:
        """Reapply theme settings from the held configuration."""
        self._theme.post_init_store()

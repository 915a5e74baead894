"""Loading of configuration profiles from the authority."""

import asyncio

import structlog

from src.features.configuration.constants import (
    ADMIN_CONFIG_PATH_TEMPLATE,
    BOOTSTRAP_PATH,
    CAPTION_BOOTSTRAP_FAILED,
    CAPTION_GET_FAILED,
    COMPONENT_CONFIG_STORE,
    PROFILE_CURRENT,
)
from src.features.configuration.errors import (
    ConfigStoreError,
    TransportError,
    UnknownError,
)
from src.features.configuration.metrics import ConfigStoreMetrics
from src.features.configuration.models import Configuration, Severity
from src.features.configuration.protocols import NotificationSink, Transport
from src.features.configuration.state import ConfigurationState
from src.features.configuration.state_machine import LoadState
from src.features.configuration.theme import ThemeApplier


logger = structlog.get_logger()


class ConfigLoader:
    """Fetches configuration profiles and updates the shared holder.

    ``init_store`` is the bootstrap path and the only writer of the load
    state. ``get_config`` replaces the held configuration without touching
    the load state.

    Overlapping ``init_store`` calls share one in-flight request.
    """

    def __init__(
        self,
        state: ConfigurationState,
        transport: Transport,
        notifications: NotificationSink,
        theme: ThemeApplier,
    ) -> None:
        """Initialize the loader.

        Args:
            state: Shared configuration holder.
            transport: HTTP primitive used to reach the authority.
            notifications: Sink for user-visible errors.
            theme: Applier run after a successful bootstrap.
        """
        self._state = state
        self._transport = transport
        self._notifications = notifications
        self._theme = theme
        self._bootstrap_task: asyncio.Task[None] | None = None
        self._metrics = ConfigStoreMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_CONFIG_STORE)

    async def _fetch_configuration(self, path: str) -> Configuration:
        """GET a configuration document and validate it.

        Args:
            path: Request path.

        Returns:
            Parsed configuration.

        Raises:
            TransportError: If unreachable or the status is not 2xx.
            ParseError: If the body is not a configuration.
            UnknownError: On any other failure.
        """
        try:
            response = await self._transport.request("GET", path)
            if not response.ok:
                msg = f"Authority answered HTTP {response.status_code} for {path}"
                raise TransportError(msg, status_code=response.status_code, path=path)
            return Configuration.from_payload(response.json(), path=path)
        except ConfigStoreError:
            raise
        except Exception as e:
            raise UnknownError(str(e) or type(e).__name__) from e

    async def get_config(self, profile: str = PROFILE_CURRENT) -> bool:
        """Load a named profile from the admin endpoint.

        Failures are reported through the notification sink, never raised.

        Args:
            profile: Profile name, e.g. ``current`` or ``currentActive``.

        Returns:
            True if the held configuration was replaced.
        """
        path = ADMIN_CONFIG_PATH_TEMPLATE.format(profile=profile)
        log = self._log.bind(profile=profile, path=path)

        self._metrics.record_load_started()
        log.info("config_load_started")

        try:
            configuration = await self._fetch_configuration(path)
        except ConfigStoreError as e:
            self._metrics.record_load_failure(e.error_class)
            log.warning("config_load_failed", **e.to_dict())
            self._notifications.notify(
                e.message, CAPTION_GET_FAILED, Severity.NEGATIVE
            )
            return False

        self._state.replace(configuration)
        self._metrics.record_load_succeeded()
        log.info("config_load_complete")
        return True

    async def init_store(self, force_reload: bool = False) -> None:
        """Bootstrap the held configuration from the active profile.

        No-op when already loaded unless ``force_reload`` is set. While a
        bootstrap is in flight, further calls wait for it instead of
        issuing another request.

        Args:
            force_reload: Reload even if already loaded.
        """
        if self._state.is_loaded and not force_reload:
            self._metrics.record_bootstrap_skipped()
            self._log.info("bootstrap_skipped", reason="already_loaded")
            return

        task = self._bootstrap_task
        if task is not None and not task.done():
            self._metrics.record_bootstrap_joined()
            self._log.info("bootstrap_joined")
            await asyncio.shield(task)
            return

        task = asyncio.get_running_loop().create_task(self._bootstrap())
        self._bootstrap_task = task
        await asyncio.shield(task)

    async def _bootstrap(self) -> None:
        """Run one bootstrap attempt, driving the load state."""
        log = self._log.bind(path=BOOTSTRAP_PATH)

        self._state.transition(LoadState.WIP)
        self._metrics.record_load_started()
        log.info("bootstrap_started", phase=LoadState.WIP.name)

        try:
            configuration = await self._fetch_configuration(BOOTSTRAP_PATH)
        except ConfigStoreError as e:
            # The previously held configuration stays available.
            self._state.transition(LoadState.ERROR)
            self._metrics.record_load_failure(e.error_class)
            log.warning("bootstrap_failed", phase=LoadState.ERROR.name, **e.to_dict())
            self._notifications.notify(
                e.message, CAPTION_BOOTSTRAP_FAILED, Severity.NEGATIVE
            )
            return

        self._state.replace(configuration)
        try:
            self._theme.post_init_store()
        except Exception:
            self._state.transition(LoadState.ERROR)
            log.exception("bootstrap_theme_failed", phase=LoadState.ERROR.name)
            raise

        self._state.transition(LoadState.DONE)
        self._metrics.record_load_succeeded()
        log.info("bootstrap_complete", phase=LoadState.DONE.name)

"""Submission of the held configuration to the authority."""

import structlog
from pydantic import ValidationError

from src.features.configuration.constants import (
    ADMIN_SAVE_PATH,
    CAPTION_SAVE_FAILED,
    CAPTION_VALIDATION_ERROR,
    COMPONENT_CONFIG_STORE,
    MSG_SAVE_OK,
    PROFILE_CURRENT_ACTIVE,
)
from src.features.configuration.errors import (
    ConfigRejectedError,
    ConfigStoreError,
    ConfigStoreErrorClass,
    ParseError,
    UnknownError,
)
from src.features.configuration.formatting import format_validation_details
from src.features.configuration.loader import ConfigLoader
from src.features.configuration.metrics import ConfigStoreMetrics
from src.features.configuration.models import RejectionBody, Severity
from src.features.configuration.protocols import NotificationSink, Transport
from src.features.configuration.results import (
    SaveAccepted,
    SaveFailed,
    SaveRejected,
    SaveResult,
)
from src.features.configuration.state import ConfigurationState
from src.features.configuration.theme import ThemeApplier
from src.features.transport.models import TransportResponse


logger = structlog.get_logger()


def interpret_rejection(response: TransportResponse) -> ConfigStoreError:
    """Turn a non-2xx save response into a typed error.

    Args:
        response: The authority's answer.

    Returns:
        ConfigRejectedError for a structured ``detail`` list, UnknownError
        for a plain-text ``detail``, ParseError for anything else.
    """
    try:
        payload = response.json()
    except ParseError as e:
        return ParseError(
            f"HTTP {response.status_code}: {e.message}", path=response.path
        )

    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return UnknownError(f"HTTP {response.status_code}: {payload['detail']}")

    try:
        body = RejectionBody.model_validate(payload)
    except ValidationError:
        return ParseError(
            f"HTTP {response.status_code}: unexpected error body",
            path=response.path,
        )
    return ConfigRejectedError(body.detail)


class ConfigPersister:
    """Submits the held configuration and re-synchronizes after acceptance.

    The authority may normalize or default fields while persisting, so an
    accepted save is followed by a reload of the active profile rather than
    trusting the submitted copy. The load state is never touched.
    """

    def __init__(
        self,
        state: ConfigurationState,
        transport: Transport,
        notifications: NotificationSink,
        loader: ConfigLoader,
        theme: ThemeApplier,
    ) -> None:
        """Initialize the persister.

        Args:
            state: Shared configuration holder.
            transport: HTTP primitive used to reach the authority.
            notifications: Sink for the outcome message.
            loader: Loader used for the post-save reload.
            theme: Applier rerun after the reload.
        """
        self._state = state
        self._transport = transport
        self._notifications = notifications
        self._loader = loader
        self._theme = theme
        self._metrics = ConfigStoreMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_CONFIG_STORE, path=ADMIN_SAVE_PATH)

    async def _submit(self) -> SaveResult:
        """POST the held configuration and classify the answer."""
        payload = self._state.configuration.to_payload()
        try:
            response = await self._transport.request(
                "POST", ADMIN_SAVE_PATH, json=payload
            )
        except ConfigStoreError as e:
            return SaveFailed(error_class=e.error_class, description=e.message)
        except Exception as e:
            error = UnknownError(str(e) or type(e).__name__)
            return SaveFailed(error_class=error.error_class, description=error.message)

        if response.ok:
            return SaveAccepted()

        error = interpret_rejection(response)
        if isinstance(error, ConfigRejectedError):
            return SaveRejected(details=tuple(error.validation_details))
        return SaveFailed(error_class=error.error_class, description=error.message)

    async def save_config(self) -> SaveResult:
        """Persist the held configuration.

        Returns:
            SaveAccepted, SaveRejected or SaveFailed. Every outcome emits
            exactly one notification of its own.
        """
        self._log.info("config_save_started")
        result = await self._submit()

        if isinstance(result, SaveAccepted):
            reloaded = await self._loader.get_config(PROFILE_CURRENT_ACTIVE)
            self._theme.post_init_store()
            self._metrics.record_save_accepted()
            self._log.info("config_save_accepted", reloaded=reloaded)
            self._notifications.notify(MSG_SAVE_OK, None, Severity.POSITIVE)
            return SaveAccepted(reloaded=reloaded)

        if isinstance(result, SaveRejected):
            self._metrics.record_save_rejected()
            self._log.warning(
                "config_save_rejected",
                error_class=ConfigStoreErrorClass.VALIDATION.value,
                detail_count=len(result.details),
            )
            self._notifications.notify(
                format_validation_details(result.details),
                CAPTION_VALIDATION_ERROR,
                Severity.NEGATIVE,
                rich_formatting=True,
            )
            return result

        self._metrics.record_save_failure(result.error_class)
        self._log.warning(
            "config_save_failed",
            error_class=result.error_class.value,
            description=result.description,
        )
        self._notifications.notify(
            result.description, CAPTION_SAVE_FAILED, Severity.NEGATIVE
        )
        return result

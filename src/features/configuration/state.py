"""Holder of the current configuration and its load state."""

from src.features.configuration.models import Configuration
from src.features.configuration.state_machine import LoadState, LoadStateMachine


class ConfigurationState:
    """Authoritative in-memory holder of the client's configuration.

    Constructed once per session and passed by reference to the loader,
    persister and theme applier. UI code edits ``configuration`` in place
    between loads; loads replace it wholesale.
    """

    def __init__(self) -> None:
        """Initialize with the default configuration in INIT state."""
        self._configuration = Configuration()
        self._state_machine = LoadStateMachine()

    @property
    def configuration(self) -> Configuration:
        """Get the held configuration."""
        return self._configuration

    @property
    def load_state(self) -> LoadState:
        """Get the current load state."""
        return self._state_machine.state

    @property
    def is_loaded(self) -> bool:
        return self._state_machine.is_loaded()

    @property
    def is_loading(self) -> bool:
        return self._state_machine.is_loading()

    def replace(self, configuration: Configuration) -> None:
        """Replace the held configuration wholesale.

        Args:
            configuration: Freshly loaded configuration.
        """
        self._configuration = configuration

    def transition(self, to_state: LoadState) -> None:
        """Move the load state machine.

        Args:
            to_state: The target state.

        Raises:
            LoadStateError: If the transition is invalid.
        """
        self._state_machine.transition(to_state)

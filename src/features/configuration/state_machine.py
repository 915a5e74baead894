"""Load state machine for the configuration store."""

from enum import Enum, auto
from typing import ClassVar


class LoadState(Enum):
    """Configuration load states.

    State transitions:
        INIT -> WIP: First bootstrap admitted
        WIP -> DONE: Configuration fetched and parsed
        WIP -> ERROR: Fetch or parse failed
        DONE -> WIP: Forced reload
        ERROR -> WIP: Manual retry
    """

    INIT = auto()
    WIP = auto()
    DONE = auto()
    ERROR = auto()


class LoadStateError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: LoadState, to_state: LoadState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid state transition: {from_state.name} -> {to_state.name}"
        )


class LoadStateMachine:
    """State machine for configuration loading.

    There is no terminal state: DONE and ERROR both lead back to WIP.
    """

    VALID_TRANSITIONS: ClassVar[dict[LoadState, set[LoadState]]] = {
        LoadState.INIT: {LoadState.WIP},
        LoadState.WIP: {LoadState.DONE, LoadState.ERROR},
        LoadState.DONE: {LoadState.WIP},
        LoadState.ERROR: {LoadState.WIP},
    }

    def __init__(self) -> None:
        """Initialize the state machine in INIT state."""
        self._state = LoadState.INIT

    @property
    def state(self) -> LoadState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: LoadState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: The target state.

        Returns:
            True if the transition is valid, False otherwise.
        """
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: LoadState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            LoadStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            raise LoadStateError(self._state, to_state)
        self._state = to_state

    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._state == LoadState.DONE

    def is_loading(self) -> bool:
        """Check if a bootstrap load is in progress."""
        return self._state == LoadState.WIP

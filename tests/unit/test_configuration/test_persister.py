"""Unit tests for the configuration persister."""

import asyncio

import pytest

from src.features.configuration.constants import (
    ADMIN_SAVE_PATH,
    BOOTSTRAP_PATH,
    CAPTION_GET_FAILED,
    CAPTION_SAVE_FAILED,
    CAPTION_VALIDATION_ERROR,
    MSG_SAVE_OK,
)
from src.features.configuration.errors import ConfigStoreErrorClass, TransportError
from src.features.configuration.loader import ConfigLoader
from src.features.configuration.metrics import ConfigStoreMetrics
from src.features.configuration.models import DarkMode, Severity, ThemeMode
from src.features.configuration.persister import ConfigPersister, interpret_rejection
from src.features.configuration.results import SaveAccepted, SaveFailed, SaveRejected
from src.features.configuration.sinks import RecordingThemeSink
from src.features.configuration.state import ConfigurationState
from src.features.configuration.state_machine import LoadState
from src.features.configuration.theme import ThemeApplier
from tests.helpers.fakes import (
    FakeAuthority,
    OrderedNotificationSink,
    json_response,
    raw_response,
)


RELOAD_PATH = "/api/admin/config/currentActive"
LOADED = {
    "uisettings": {
        "PRIMARY_COLOR": "#111111",
        "SECONDARY_COLOR": "#222222",
        "theme": "light",
    },
}
NORMALIZED = {
    "uisettings": {
        "PRIMARY_COLOR": "#111111",
        "SECONDARY_COLOR": "#222222",
        "theme": "dark",
    },
    "common": {"language": "en"},
}


class _Harness:
    """Persister wired to in-memory collaborators, bootstrapped."""

    def __init__(self, loaded: dict[str, object] = LOADED) -> None:
        self.events: list[tuple[str, ...]] = []
        self.authority = FakeAuthority(self.events)
        self.notifications = OrderedNotificationSink(self.events)
        self.theme_sink = RecordingThemeSink()
        self.state = ConfigurationState()
        theme = ThemeApplier(self.state, self.theme_sink)
        self.loader = ConfigLoader(
            self.state, self.authority, self.notifications, theme
        )
        self.persister = ConfigPersister(
            self.state, self.authority, self.notifications, self.loader, theme
        )
        self.authority.add("GET", BOOTSTRAP_PATH, json_response(BOOTSTRAP_PATH, loaded))
        asyncio.run(self.loader.init_store())
        self.events.clear()
        self.theme_sink.calls.clear()


class TestSaveAccepted:
    """Tests for an accepted save."""

    def setup_method(self) -> None:
        """Reset metrics before each test."""
        ConfigStoreMetrics.reset()

    @pytest.mark.unit
    def test_submits_held_configuration(self) -> None:
        """The held configuration, including local edits, is posted."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, json_response(ADMIN_SAVE_PATH, None))
        h.authority.add("GET", RELOAD_PATH, json_response(RELOAD_PATH, NORMALIZED))
        h.state.configuration.uisettings.theme = ThemeMode.DARK

        asyncio.run(h.persister.save_config())

        method, path, body = h.authority.calls[1]
        assert (method, path) == ("POST", ADMIN_SAVE_PATH)
        assert body == {
            "uisettings": {
                "PRIMARY_COLOR": "#111111",
                "SECONDARY_COLOR": "#222222",
                "theme": "dark",
            }
        }

    @pytest.mark.unit
    def test_submits_edits_to_defaulted_uisettings(self) -> None:
        """Edits are posted even when the loaded copy had no uisettings."""
        h = _Harness(loaded={"common": {"language": "en"}})
        h.authority.add("POST", ADMIN_SAVE_PATH, json_response(ADMIN_SAVE_PATH, None))
        h.authority.add("GET", RELOAD_PATH, json_response(RELOAD_PATH, NORMALIZED))
        h.state.configuration.uisettings.theme = ThemeMode.DARK
        h.state.configuration.uisettings.PRIMARY_COLOR = "#000000"

        asyncio.run(h.persister.save_config())

        _, _, body = h.authority.calls[1]
        assert body == {
            "common": {"language": "en"},
            "uisettings": {"PRIMARY_COLOR": "#000000", "theme": "dark"},
        }

    @pytest.mark.unit
    def test_reload_then_notify_in_order(self) -> None:
        """Acceptance reloads once, then emits one success notification."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, json_response(ADMIN_SAVE_PATH, None))
        h.authority.add("GET", RELOAD_PATH, json_response(RELOAD_PATH, NORMALIZED))

        result = asyncio.run(h.persister.save_config())

        assert result == SaveAccepted(reloaded=True)
        assert h.events == [
            ("request", "POST", ADMIN_SAVE_PATH),
            ("request", "GET", RELOAD_PATH),
            ("notify", "positive"),
        ]
        assert h.authority.calls_to("GET", RELOAD_PATH) == 1
        assert len(h.notifications.history) == 1
        assert h.notifications.history[0].message == MSG_SAVE_OK
        assert h.notifications.history[0].severity == Severity.POSITIVE

    @pytest.mark.unit
    def test_reloaded_copy_replaces_and_theme_reapplied(self) -> None:
        """The authority's normalized copy wins and is applied."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, raw_response(ADMIN_SAVE_PATH, b""))
        h.authority.add("GET", RELOAD_PATH, json_response(RELOAD_PATH, NORMALIZED))

        asyncio.run(h.persister.save_config())

        assert h.state.configuration.to_payload() == NORMALIZED
        assert h.theme_sink.dark_mode == DarkMode.ON
        assert h.state.load_state == LoadState.DONE
        assert ConfigStoreMetrics.get_instance().config_saves_accepted_total == 1

    @pytest.mark.unit
    def test_reload_failure_keeps_state_and_still_confirms(self) -> None:
        """A failed reload is reported but does not move the load state."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, json_response(ADMIN_SAVE_PATH, None))
        h.authority.add("GET", RELOAD_PATH, TransportError("Connection failed"))

        result = asyncio.run(h.persister.save_config())

        assert result == SaveAccepted(reloaded=False)
        assert h.state.load_state == LoadState.DONE
        assert h.state.configuration.to_payload() == LOADED
        captions = [n.caption for n in h.notifications.history]
        assert captions == [CAPTION_GET_FAILED, None]
        assert h.notifications.history[-1].severity == Severity.POSITIVE


class TestSaveRejected:
    """Tests for a save rejected by the authority."""

    def setup_method(self) -> None:
        """Reset metrics before each test."""
        ConfigStoreMetrics.reset()

    @pytest.mark.unit
    def test_single_detail_message(self) -> None:
        """One detail renders as '<msg>: <loc→loc>'."""
        h = _Harness()
        h.authority.add(
            "POST",
            ADMIN_SAVE_PATH,
            json_response(
                ADMIN_SAVE_PATH,
                {"detail": [{"loc": ["uisettings", "theme"], "msg": "invalid"}]},
                422,
            ),
        )
        before = h.state.configuration.to_payload()

        result = asyncio.run(h.persister.save_config())

        assert isinstance(result, SaveRejected)
        assert len(h.notifications.history) == 1
        notification = h.notifications.history[0]
        assert notification.message == "invalid: uisettings→theme"
        assert notification.caption == CAPTION_VALIDATION_ERROR
        assert notification.severity == Severity.NEGATIVE
        assert notification.rich_formatting is True
        assert h.state.configuration.to_payload() == before
        assert h.state.load_state == LoadState.DONE

    @pytest.mark.unit
    def test_multiple_details_one_line_each(self) -> None:
        """Several details become several lines in one notification."""
        h = _Harness()
        h.authority.add(
            "POST",
            ADMIN_SAVE_PATH,
            json_response(
                ADMIN_SAVE_PATH,
                {
                    "detail": [
                        {"loc": ["uisettings", "theme"], "msg": "invalid"},
                        {"loc": ["common", "countdown", 0], "msg": "too small"},
                    ]
                },
                422,
            ),
        )

        result = asyncio.run(h.persister.save_config())

        assert isinstance(result, SaveRejected)
        assert len(result.details) == 2
        assert h.notifications.history[0].message.splitlines() == [
            "invalid: uisettings→theme",
            "too small: common→countdown→0",
        ]

    @pytest.mark.unit
    def test_no_reload_and_no_theme_on_rejection(self) -> None:
        """Nothing is reloaded or reapplied after a rejection."""
        h = _Harness()
        h.authority.add(
            "POST",
            ADMIN_SAVE_PATH,
            json_response(ADMIN_SAVE_PATH, {"detail": [{"loc": ["x"], "msg": "bad"}]}, 422),
        )

        asyncio.run(h.persister.save_config())

        assert h.authority.calls_to("GET", RELOAD_PATH) == 0
        assert h.theme_sink.calls == []
        assert ConfigStoreMetrics.get_instance().config_saves_rejected_total == 1


class TestSaveFailed:
    """Tests for saves that fail before a verdict."""

    def setup_method(self) -> None:
        """Reset metrics before each test."""
        ConfigStoreMetrics.reset()

    @pytest.mark.unit
    def test_transport_failure(self) -> None:
        """A transport error yields one generic error notification."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, TransportError("Connection failed: refused"))

        result = asyncio.run(h.persister.save_config())

        assert result == SaveFailed(
            error_class=ConfigStoreErrorClass.TRANSPORT,
            description="Connection failed: refused",
        )
        assert len(h.notifications.history) == 1
        assert h.notifications.history[0].caption == CAPTION_SAVE_FAILED
        assert h.notifications.history[0].message == "Connection failed: refused"
        assert h.state.configuration.to_payload() == LOADED
        assert h.state.load_state == LoadState.DONE
        assert ConfigStoreMetrics.get_instance().config_save_failures_total == {
            "TRANSPORT": 1
        }

    @pytest.mark.unit
    def test_unexpected_transport_exception(self) -> None:
        """Any other exception from the transport is an unknown failure."""
        h = _Harness()
        h.authority.add("POST", ADMIN_SAVE_PATH, RuntimeError("socket exploded"))

        result = asyncio.run(h.persister.save_config())

        assert result == SaveFailed(
            error_class=ConfigStoreErrorClass.UNKNOWN,
            description="socket exploded",
        )
        assert len(h.notifications.history) == 1
        assert h.notifications.history[0].caption == CAPTION_SAVE_FAILED
        assert h.notifications.history[0].message == "socket exploded"
        assert h.state.load_state == LoadState.DONE
        assert ConfigStoreMetrics.get_instance().config_save_failures_total == {
            "UNKNOWN": 1
        }

    @pytest.mark.unit
    def test_unparseable_error_body(self) -> None:
        """A non-2xx body that is not JSON is a parse failure."""
        h = _Harness()
        h.authority.add(
            "POST", ADMIN_SAVE_PATH, raw_response(ADMIN_SAVE_PATH, b"Bad Gateway", 502)
        )

        result = asyncio.run(h.persister.save_config())

        assert isinstance(result, SaveFailed)
        assert result.error_class == ConfigStoreErrorClass.PARSE
        assert result.description.startswith("HTTP 502")
        assert h.notifications.history[0].caption == CAPTION_SAVE_FAILED


class TestInterpretRejection:
    """Tests for interpret_rejection."""

    @pytest.mark.unit
    def test_plain_text_detail(self) -> None:
        """A string detail is surfaced as an unknown error."""
        error = interpret_rejection(
            json_response(ADMIN_SAVE_PATH, {"detail": "Internal Server Error"}, 500)
        )
        assert error.error_class == ConfigStoreErrorClass.UNKNOWN
        assert error.message == "HTTP 500: Internal Server Error"

    @pytest.mark.unit
    def test_deeply_nested_body(self) -> None:
        """A body too deeply nested to decode is a parse error."""
        error = interpret_rejection(
            raw_response(ADMIN_SAVE_PATH, b"[" * 200000, 500)
        )
        assert error.error_class == ConfigStoreErrorClass.PARSE
        assert error.message.startswith("HTTP 500")

    @pytest.mark.unit
    def test_wrong_shape(self) -> None:
        """JSON without a detail list is a parse error."""
        error = interpret_rejection(
            json_response(ADMIN_SAVE_PATH, {"error": "nope"}, 400)
        )
        assert error.error_class == ConfigStoreErrorClass.PARSE

    @pytest.mark.unit
    def test_structured_detail(self) -> None:
        """A detail list is a validation rejection."""
        error = interpret_rejection(
            json_response(ADMIN_SAVE_PATH, {"detail": [{"loc": ["a"], "msg": "b"}]}, 422)
        )
        assert error.error_class == ConfigStoreErrorClass.VALIDATION

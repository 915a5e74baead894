"""Async HTTP transport for talking to the configuration authority."""

import time
from types import TracebackType

import httpx
import structlog

from src.features.configuration.errors import TransportError, UnknownError
from src.features.transport.config import TransportConfig
from src.features.transport.models import TransportResponse
from src.features.transport.redact import redact_url_credentials


logger = structlog.get_logger()


class HttpTransport:
    """HTTP transport over a shared ``httpx.AsyncClient``.

    Requests are issued once; there is no retry. Network failures are
    raised as ``TransportError``, any other exception as ``UnknownError``.
    Responses are returned whatever their status code.
    """

    def __init__(
        self,
        config: TransportConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Connection settings.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        """
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            headers={
                "User-Agent": config.user_agent,
                "Accept": "application/json",
                **config.headers,
            },
            transport=transport,
        )
        self._log = logger.bind(
            component="transport",
            base_url=redact_url_credentials(config.base_url),
        )

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client."""
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
    ) -> TransportResponse:
        """Issue a request against the authority.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json: Optional body, sent as JSON.

        Returns:
            TransportResponse with status, headers and body.

        Raises:
            TransportError: If the authority could not be reached.
            UnknownError: On any other failure.
        """
        start_time_ns = time.perf_counter_ns()
        log = self._log.bind(method=method, path=path)

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            log.warning("http_request_failed", error_class="timeout", error=str(e))
            msg = f"Request timed out: {e}"
            raise TransportError(msg, path=path) from e
        except httpx.ConnectError as e:
            log.warning("http_request_failed", error_class="connect", error=str(e))
            msg = f"Connection failed: {e}"
            raise TransportError(msg, path=path) from e
        except httpx.HTTPError as e:
            log.warning("http_request_failed", error_class="http", error=str(e))
            msg = f"HTTP error: {e}"
            raise TransportError(msg, path=path) from e
        except Exception as e:  # noqa: BLE001
            log.warning("http_request_failed", error_class="unknown", error=str(e))
            msg = f"Unexpected error: {e}"
            raise UnknownError(msg) from e

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        log.info(
            "http_request_complete",
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )

        return TransportResponse(
            status_code=response.status_code,
            path=path,
            headers=dict(response.headers),
            body_bytes=response.content,
        )

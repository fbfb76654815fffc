"""Single-exchange HTTP transport on top of ``httpx.Client``."""

from typing import Any

import httpx

from toornament_client.errors.exceptions import NetworkError, RequestTimeoutError

API_BASE_URL = "https://api.toornament.com/v1"
TOKEN_URL = "https://api.toornament.com/oauth/v2/token"
DEFAULT_TIMEOUT = 30.0


class HTTPTransport:
    """Perform one HTTP exchange per call, with a fixed timeout.

    Relative URLs are resolved against ``base_url``; absolute URLs (the token
    endpoint) are used as given. Transport failures are converted into
    ``NetworkError`` / ``RequestTimeoutError``; HTTP status codes are never
    interpreted here.

    Args:
        base_url: Root of the resource endpoints.
        timeout: Seconds before an exchange is abandoned; None disables it.
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``
            in tests or one of the retry transports.
    """

    def __init__(
        self,
        *,
        base_url: str = API_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        Raises:
            RequestTimeoutError: If the exchange exceeded the timeout.
            NetworkError: For any other transport-level failure.
        """
        try:
            return self._client.request(method, url, headers=headers, params=params, json=json, data=data)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"{method} {url} timed out after {self.timeout}s: {e}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

"""OAuth2 client-credential tokens: acquisition, caching and refresh.

The cached token is the only mutable state shared by callers of one client.
Reads of a fresh token take no lock; a refresh is serialized by a lock with a
double-check, so concurrent callers facing an expired cache trigger a single
token request and all receive its result.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock

import httpx

from toornament_client.auth.credentials import Credentials
from toornament_client.auth.exceptions import (
    InvalidCredentialsError,
    MalformedTokenResponseError,
    TokenEndpointUnreachableError,
)
from toornament_client.errors.exceptions import NetworkError
from toornament_client.errors.models import ErrorEnvelope
from toornament_client.transport.http import TOKEN_URL, HTTPTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessToken:
    """A bearer token and the clock reading at which it stops being valid.

    ``margin`` is how long before ``expires_at`` the token is treated as
    stale; it never exceeds half the token's lifetime.
    """

    value: str = field(repr=False)
    expires_at: float
    margin: float = 0.0

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at - self.margin


class TokenManager:
    """Produce a valid bearer token on demand.

    Args:
        credentials: Application credentials.
        transport: Transport used for the token exchange.
        token_url: OAuth2 token endpoint.
        expiry_margin: Seconds before ``expires_at`` at which a cached token
            is considered stale and refreshed. Tokens living less than twice
            this long use half their lifetime instead.
        clock: Monotonic clock returning seconds; injectable for tests.
    """

    DEFAULT_EXPIRY_MARGIN = 30.0

    def __init__(
        self,
        credentials: Credentials,
        transport: HTTPTransport,
        *,
        token_url: str = TOKEN_URL,
        expiry_margin: float = DEFAULT_EXPIRY_MARGIN,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._credentials = credentials
        self._transport = transport
        self._token_url = token_url
        self._expiry_margin = expiry_margin
        self._clock = clock
        self._token: AccessToken | None = None
        self._lock = Lock()

    @property
    def cached_token(self) -> AccessToken | None:
        return self._token

    def _usable(self, token: AccessToken | None) -> bool:
        return token is not None and token.is_fresh(self._clock())

    def obtain_token(self) -> AccessToken:
        """Return a token that is valid for at least its expiry margin.

        Raises:
            InvalidCredentialsError: The token endpoint rejected the credentials.
            TokenEndpointUnreachableError: The endpoint could not be reached.
            MalformedTokenResponseError: The endpoint answered with garbage.
        """
        token = self._token
        if self._usable(token):
            return token

        with self._lock:
            # Another caller may have refreshed while we waited for the lock
            token = self._token
            if self._usable(token):
                return token
            self._token = self._request_token()
            return self._token

    def refresh(self) -> AccessToken:
        """Unconditionally exchange the credentials for a new token."""
        with self._lock:
            self._token = self._request_token()
            return self._token

    def invalidate(self, rejected: AccessToken | None = None) -> bool:
        """Drop the cached token so the next ``obtain_token`` refreshes.

        When ``rejected`` is given, the cache is only cleared if it still
        holds that token; a token refreshed meanwhile by another caller is
        kept.

        Returns:
            True if the cached token was dropped.
        """
        with self._lock:
            if self._token is None:
                return False
            if rejected is not None and self._token != rejected:
                return False
            logger.debug("Invalidating cached access token")
            self._token = None
            return True

    def _request_token(self) -> AccessToken:
        issued_at = self._clock()
        logger.debug(f"Requesting access token from {self._token_url}")
        try:
            response = self._transport.send(
                "POST",
                self._token_url,
                headers={"X-Api-Key": self._credentials.api_key, "Accept": "application/json"},
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._credentials.client_id,
                    "client_secret": self._credentials.client_secret,
                },
            )
        except NetworkError as e:
            raise TokenEndpointUnreachableError(f"Token endpoint unreachable: {e}") from e

        if response.status_code >= 500:
            raise TokenEndpointUnreachableError(f"Token endpoint answered HTTP {response.status_code}")
        if not response.is_success:
            raise self._credentials_error(response)

        token = self._parse_token(response, issued_at)
        logger.debug(f"Obtained access token valid for {token.expires_at - issued_at:.0f}s")
        return token

    def _credentials_error(self, response: httpx.Response) -> InvalidCredentialsError:
        envelope = ErrorEnvelope.from_response(response)
        message = f"Token endpoint rejected the credentials (HTTP {response.status_code})"
        if envelope is not None:
            message += f": {envelope.to_exception_message()}"
        return InvalidCredentialsError(
            message,
            status_code=response.status_code,
            error=envelope.error if envelope else None,
            error_description=envelope.error_description if envelope else None,
        )

    def _parse_token(self, response: httpx.Response, issued_at: float) -> AccessToken:
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedTokenResponseError(f"Token response is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedTokenResponseError("Token response is not a JSON object")

        value = data.get("access_token")
        if not isinstance(value, str) or not value:
            raise MalformedTokenResponseError("Token response has no 'access_token'")

        expires_in = data.get("expires_in")
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float, str)):
            raise MalformedTokenResponseError("Token response has no valid 'expires_in'")
        try:
            lifetime = float(expires_in)
        except ValueError:
            raise MalformedTokenResponseError(f"Invalid 'expires_in': {expires_in!r}") from None
        if lifetime <= 0:
            raise MalformedTokenResponseError(f"Invalid 'expires_in': {expires_in!r}")

        margin = min(self._expiry_margin, lifetime / 2)
        return AccessToken(value=value, expires_at=issued_at + lifetime, margin=margin)

"""Opt-in retry transports stacked under the client's ``httpx.Client``.

The client itself makes exactly one attempt per request (plus the single
stale-token retry). Callers who want resiliency on top of that pass one of
these transports when building the client:

- IdempotentOnlyRetry: only retries GET, HEAD, OPTIONS, TRACE on 502/503/504
- RateLimitAwareRetry: retries every method on 429 (honouring Retry-After),
  and idempotent methods (including PUT and DELETE) on 502/503/504

| Strategy | 429 (Rate Limit) | 5xx Errors | Best For |
|----------|------------------|------------|----------|
| `IdempotentOnlyRetry` | No retry | GET, HEAD, OPTIONS, TRACE | Maximum safety |
| `RateLimitAwareRetry` | All methods | GET, HEAD, PUT, DELETE, OPTIONS, TRACE | Rate-limited accounts |

Example:
    ```python
    import httpx

    from toornament_client import Toornament
    from toornament_client.transport import RateLimitAwareRetry

    client = Toornament.from_env(
        transport=RateLimitAwareRetry(wrapped_transport=httpx.HTTPTransport(), max_retries=3),
    )
    ```
"""

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

logger = logging.getLogger(__name__)

DEFAULT_RETRY_STATUS_CODES: frozenset[int] = frozenset([502, 503, 504])


class _RetryTransport(httpx.BaseTransport):
    """Shared retry loop; subclasses decide what is retried and when.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Maximum number of retry attempts (default: 5)
        backoff_factor: Multiplier for exponential backoff (default: 1.0)
        max_backoff: Maximum delay between attempts in seconds (default: 60)
        retry_status_codes: 5xx codes that trigger retries (default: 502, 503, 504)
        sleep: Function used to wait between attempts
    """

    IDEMPOTENT_METHODS: frozenset[str] = frozenset()

    def __init__(
        self,
        *,
        wrapped_transport: httpx.BaseTransport,
        max_retries: int = 5,
        backoff_factor: float = 1.0,
        max_backoff: float = 60.0,
        retry_status_codes: frozenset[int] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.max_backoff = max_backoff
        self.retry_status_codes = retry_status_codes or DEFAULT_RETRY_STATUS_CODES
        self._sleep = sleep

    def close(self) -> None:
        self._wrapped_transport.close()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        retries = 0
        while True:
            try:
                response = self._wrapped_transport.handle_request(request)
            except httpx.TransportError as e:
                if retries >= self.max_retries or request.method not in self.IDEMPOTENT_METHODS:
                    raise
                retries += 1
                delay = self._backoff(retries)
                logger.warning(
                    f"Request {request.method} {request.url} failed with {e}, "
                    f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
                )
                self._sleep(delay)
                continue

            delay = self._retry_delay(request, response, retries + 1) if retries < self.max_retries else None
            if delay is None:
                return response

            response.close()
            retries += 1
            logger.warning(
                f"Request {request.method} {request.url} failed with {response.status_code}, "
                f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
            )
            self._sleep(delay)

    def _retry_delay(self, request: httpx.Request, response: httpx.Response, attempt: int) -> float | None:
        """Seconds to wait before retrying, or None to return ``response``."""
        raise NotImplementedError

    def _backoff(self, attempt: int) -> float:
        """Exponential backoff: backoff_factor * 2 ** (attempt - 1), capped at max_backoff."""
        return min(self.backoff_factor * (2 ** (attempt - 1)), self.max_backoff)


class IdempotentOnlyRetry(_RetryTransport):
    """Retry only truly idempotent methods on server errors; never on 429.

    Use this when duplicate POST, PATCH, PUT or DELETE calls would be harmful.
    """

    IDEMPOTENT_METHODS: frozenset[str] = frozenset(["HEAD", "GET", "OPTIONS", "TRACE"])

    def _retry_delay(self, request: httpx.Request, response: httpx.Response, attempt: int) -> float | None:
        if request.method in self.IDEMPOTENT_METHODS and response.status_code in self.retry_status_codes:
            return self._backoff(attempt)
        return None


class RateLimitAwareRetry(_RetryTransport):
    """Retry every method on 429 and idempotent methods on server errors.

    The ``Retry-After`` header (seconds or HTTP date) is honoured and capped
    at ``max_backoff``; without it exponential backoff is used.
    """

    IDEMPOTENT_METHODS: frozenset[str] = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

    def _retry_delay(self, request: httpx.Request, response: httpx.Response, attempt: int) -> float | None:
        if response.status_code == 429:
            delay = self._parse_retry_after(response)
            return self._backoff(attempt) if delay is None else delay
        if response.status_code in self.retry_status_codes and request.method in self.IDEMPOTENT_METHODS:
            return self._backoff(attempt)
        return None

    def _parse_retry_after(self, response: httpx.Response) -> float | None:
        """Parse ``Retry-After`` as delay-seconds or HTTP-date; None if absent or invalid."""
        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None

        try:
            delay = float(int(retry_after))
        except ValueError:
            try:
                delay = (parsedate_to_datetime(retry_after) - datetime.now(UTC)).total_seconds()
            except (ValueError, TypeError):
                return None

        # Negative values and dates in the past (clock skew) fall back to backoff
        if delay < 0:
            return None
        return min(delay, self.max_backoff)

"""Transport layer.

Modules:
    http: The single-exchange transport used by the token manager and the
        dispatcher
    retry: Opt-in retry transports that callers may stack underneath it

Example:
    ```python
    import httpx

    from toornament_client.transport import HTTPTransport, IdempotentOnlyRetry

    transport = HTTPTransport(
        timeout=10.0,
        transport=IdempotentOnlyRetry(wrapped_transport=httpx.HTTPTransport()),
    )
    ```
"""

from toornament_client.transport.http import API_BASE_URL, DEFAULT_TIMEOUT, TOKEN_URL, HTTPTransport
from toornament_client.transport.retry import IdempotentOnlyRetry, RateLimitAwareRetry

__all__ = [
    "API_BASE_URL",
    "DEFAULT_TIMEOUT",
    "HTTPTransport",
    "IdempotentOnlyRetry",
    "RateLimitAwareRetry",
    "TOKEN_URL",
]

"""Testing utilities for code built on the Toornament client.

``FakeToornament`` is an ``httpx.MockTransport`` handler that plays both the
token endpoint and the resource endpoints, and records every request it
receives.

Example:
    ```python
    import httpx

    from toornament_client import Toornament
    from toornament_client.testing import FakeToornament, TEST_CREDENTIALS


    def test_lists_tournaments():
        fake = FakeToornament()
        fake.route("GET", "/v1/tournaments", json=[{"id": "1", "name": "Cup"}])

        client = Toornament(**TEST_CREDENTIALS, transport=httpx.MockTransport(fake))

        assert client.tournaments()[0].name == "Cup"
        assert fake.requests[-1].headers["Authorization"] == "Bearer token-1"
    ```
"""

import json
from collections.abc import Callable
from typing import Any

import httpx

TEST_CREDENTIALS = {"api_key": "test-api-key", "client_id": "test-client-id", "client_secret": "test-secret"}

TOKEN_PATH = "/oauth/v2/token"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeToornament:
    """Mock handler answering the token endpoint and registered routes.

    Each token request returns a new token (``token-1``, ``token-2``, ...)
    unless ``token_response`` is overridden. Unregistered routes answer 404
    with a Toornament error body.

    Attributes:
        requests: Every request received, in order.
        token_requests: Number of token requests received.
    """

    def __init__(self, *, expires_in: Any = 3600, token_response: Responder | None = None) -> None:
        self.expires_in = expires_in
        self.token_response = token_response
        self.requests: list[httpx.Request] = []
        self.token_requests = 0
        self._routes: dict[tuple[str, str], list[Responder]] = {}

    def route(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        headers: dict[str, str] | None = None,
        responder: Responder | None = None,
    ) -> None:
        """Register a response for ``method path``.

        Registering the same route several times queues the responses; the
        last one is repeated once the queue is exhausted.
        """
        if responder is None:

            def responder(request: httpx.Request) -> httpx.Response:
                if json is None:
                    return httpx.Response(status_code, headers=headers)
                return httpx.Response(status_code, json=json, headers=headers)

        self._routes.setdefault((method.upper(), path), []).append(responder)

    @property
    def resource_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == TOKEN_PATH:
            self.token_requests += 1
            if self.token_response is not None:
                return self.token_response(request)
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.token_requests}",
                    "expires_in": self.expires_in,
                    "token_type": "bearer",
                    "scope": None,
                },
            )

        responders = self._routes.get((request.method, request.url.path))
        if not responders:
            return httpx.Response(404, json={"errors": [{"message": "Not found", "scope": "query"}]})
        responder = responders.pop(0) if len(responders) > 1 else responders[0]
        return responder(request)


def request_json(request: httpx.Request) -> Any:
    """Decoded JSON body of a recorded request."""
    return json.loads(request.content)


__all__ = ["TEST_CREDENTIALS", "TOKEN_PATH", "FakeToornament", "request_json"]

"""The single dispatch point between resource paths and HTTP exchanges.

Every request of the client, whether built through the fluent navigator or
one of the direct accessor methods, goes through ``Dispatcher.execute``.
This is the only place that maps verbs to HTTP methods, attaches the bearer
token and applies the stale-token retry.

Verb to HTTP mapping:

| Verb      | Path scope            | HTTP                         |
|-----------|-----------------------|------------------------------|
| COLLECT   | collection            | GET, with the path filters   |
| READ      | entity or singular    | GET                          |
| CREATE    | collection            | POST                         |
| EDIT      | entity                | PATCH                        |
| EDIT      | singular / collection | PUT (whole replacement)      |
| DELETE    | entity                | DELETE                       |
"""

import logging
from typing import Any

import httpx

from toornament_client.auth.exceptions import TokenRejectedTwiceError
from toornament_client.auth.token import AccessToken, TokenManager
from toornament_client.codec import EntityCodec
from toornament_client.dispatch.path import ResourcePath, Scope
from toornament_client.dispatch.request import DispatchRequest, RequestTarget, Verb
from toornament_client.errors.exceptions import CodecError, InvalidNavigationError
from toornament_client.errors.handler import build_error_message, raise_for_status
from toornament_client.errors.models import ErrorEnvelope
from toornament_client.transport.http import HTTPTransport

logger = logging.getLogger(__name__)


class Dispatcher:
    """Turn a ``DispatchRequest`` into one authenticated HTTP exchange.

    Args:
        transport: Transport performing the exchanges.
        token_manager: Source of bearer tokens.
        api_key: Application API key, sent as ``X-Api-Key``.
        codec: Entity codec used for payloads and response bodies.
    """

    # The service updates entities in place with PATCH
    REPLACE_METHOD = "PATCH"
    AUTH_REJECTION_STATUSES: frozenset[int] = frozenset([401, 403])

    def __init__(
        self,
        transport: HTTPTransport,
        token_manager: TokenManager,
        *,
        api_key: str,
        codec: EntityCodec | None = None,
    ) -> None:
        self._transport = transport
        self._tokens = token_manager
        self._api_key = api_key
        self.codec = codec or EntityCodec()

    def write_request(self, path: ResourcePath, entity: Any, query: dict[str, str] | None = None) -> DispatchRequest:
        """Build the write request for ``entity`` under ``path``.

        Persisted entities (identity present) are edited at their own URL;
        unpersisted ones are created in the collection. Singular resources
        are always replaced where they are.
        """
        query = dict(query or {})
        if path.scope is Scope.SINGLETON:
            return DispatchRequest(path, Verb.EDIT, entity, query)

        collection = path.collection()
        identity = self.codec.identity(entity)
        if identity is None:
            return DispatchRequest(collection, Verb.CREATE, entity, query)
        return DispatchRequest(collection.identified_by(identity), Verb.EDIT, entity, query)

    def resolve(self, request: DispatchRequest) -> RequestTarget:
        """Resolve the HTTP method, URL and query of a request.

        Path filters only apply to collection listings; the explicit
        ``request.query`` is sent with any verb.

        Raises:
            InvalidNavigationError: If the verb does not apply to the path scope.
        """
        path, verb = request.path, request.verb
        scope = path.scope
        url = path.to_url()
        query = dict(request.query)

        if verb is Verb.COLLECT and scope is Scope.COLLECTION:
            return RequestTarget("GET", url, {**path.query_params(), **query})
        if verb is Verb.READ and scope in (Scope.ENTITY, Scope.SINGLETON):
            return RequestTarget("GET", url, query)
        if verb is Verb.CREATE and scope is Scope.COLLECTION:
            return RequestTarget("POST", path.collection().to_url(), query)
        if verb is Verb.EDIT:
            if scope is Scope.ENTITY:
                return RequestTarget(self.REPLACE_METHOD, url, query)
            if scope is Scope.SINGLETON:
                return RequestTarget("PUT", url, query)
            if scope is Scope.COLLECTION and isinstance(request.payload, (list, tuple)):
                return RequestTarget("PUT", path.collection().to_url(), query)
        if verb is Verb.DELETE and scope is Scope.ENTITY:
            return RequestTarget("DELETE", url, query)

        raise InvalidNavigationError(f"Cannot {verb.value} {path} ({scope.value} path)")

    def execute(self, request: DispatchRequest) -> httpx.Response:
        """Perform the exchange and return the successful raw response.

        A 401/403 invalidates the token that was used and the exchange is
        retried once with a fresh one.

        Raises:
            InvalidNavigationError: The verb does not apply to the path.
            CodecError: The payload could not be encoded.
            AuthError: No token could be obtained, or it was rejected twice.
            NetworkError: The exchange failed or timed out.
            APIError: The service answered with a non-2xx status.
        """
        target = self.resolve(request)
        if request.verb.is_write and request.payload is None:
            raise InvalidNavigationError(f"Cannot {request.verb.value} {request.path} without a payload")
        body = self.codec.encode(request.payload) if request.payload is not None else None

        token = self._tokens.obtain_token()
        response = self._send(target, token, body)

        if response.status_code in self.AUTH_REJECTION_STATUSES:
            logger.debug(f"{target.method} {target.url} rejected the token ({response.status_code}), refreshing")
            self._tokens.invalidate(token)
            token = self._tokens.obtain_token()
            response = self._send(target, token, body)
            if response.status_code in self.AUTH_REJECTION_STATUSES:
                envelope = ErrorEnvelope.from_response(response)
                raise TokenRejectedTwiceError(
                    build_error_message(response, envelope),
                    status_code=response.status_code,
                    response=response,
                    envelope=envelope,
                )

        raise_for_status(response)
        return response

    def dispatch(self, request: DispatchRequest, shape: Any = None) -> Any:
        """Execute ``request`` and decode the response body into ``shape``."""
        return self.decode(self.execute(request), shape)

    def decode(self, response: httpx.Response, shape: Any = None) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            data = response.json()
        except ValueError as e:
            raise CodecError(f"Response body is not JSON: {e}", shape=shape) from e
        return self.codec.decode(data, shape)

    def _send(self, target: RequestTarget, token: AccessToken, body: Any) -> httpx.Response:
        logger.debug(f"{target.method} {target.url} {target.params or ''}".rstrip())
        headers = {
            "Authorization": f"Bearer {token.value}",
            "X-Api-Key": self._api_key,
            "Accept": "application/json",
        }
        return self._transport.send(
            target.method,
            target.url,
            headers=headers,
            params=target.params or None,
            json=body,
        )

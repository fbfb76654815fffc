"""Structured exceptions for Toornament API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from toornament_client.errors.models import ErrorEnvelope


class ToornamentError(Exception):
    """Base exception for everything raised by the client."""

    pass


class InvalidNavigationError(ToornamentError):
    """A builder or terminal call is not legal for the current path scope."""

    pass


class CodecError(ToornamentError):
    """A payload could not be encoded or a body could not be decoded."""

    def __init__(self, message: str, shape: object = None):
        super().__init__(message)
        self.shape = shape


class NetworkError(ToornamentError):
    """Connection-level failure (DNS, refused connection, broken stream)."""

    pass


class RequestTimeoutError(NetworkError):
    """The exchange did not complete within the configured timeout."""

    pass


class APIError(ToornamentError):
    """Base exception for non-2xx resource responses."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        envelope: "ErrorEnvelope | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.envelope = envelope

    @property
    def provider_message(self) -> str | None:
        """Message reported by the service, if the body carried one."""
        if self.envelope is None:
            return None
        return self.envelope.to_exception_message()

    @property
    def raw_body(self) -> str:
        if self.response is None:
            return ""
        return self.response.text


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, message: str, validation_errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass

"""Error handling utilities for HTTP responses."""

import httpx

from toornament_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from toornament_client.errors.models import ErrorEnvelope

STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def exception_class_for(status_code: int) -> type[APIError]:
    if status_code in STATUS_EXCEPTIONS:
        return STATUS_EXCEPTIONS[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return APIError


def build_error_message(response: httpx.Response, envelope: ErrorEnvelope | None) -> str:
    status_code = response.status_code
    if envelope is not None:
        return f"HTTP {status_code}: {envelope.to_exception_message()}"
    response_text = response.text[:200]
    return f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"


def _parse_retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("retry-after")
    if value is None:
        # Older API versions put the delay in the body instead of the header.
        try:
            value = response.json().get("retry_after")
        except (ValueError, TypeError, AttributeError):
            return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def error_for_response(response: httpx.Response) -> APIError:
    """Build the typed exception describing a non-2xx response."""
    envelope = ErrorEnvelope.from_response(response)
    exc_class = exception_class_for(response.status_code)
    kwargs = {
        "status_code": response.status_code,
        "response": response,
        "envelope": envelope,
    }
    message = build_error_message(response, envelope)

    if exc_class is RateLimitError:
        return RateLimitError(message, retry_after=_parse_retry_after(response), **kwargs)
    if exc_class is ValidationError:
        validation_errors = envelope.field_errors() if envelope else None
        return ValidationError(message, validation_errors=validation_errors, **kwargs)
    return exc_class(message, **kwargs)


def raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate exception for HTTP error responses.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return
    raise error_for_response(response)

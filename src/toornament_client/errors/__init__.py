"""Error taxonomy and response-to-exception mapping."""

from toornament_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    CodecError,
    ConflictError,
    ForbiddenError,
    InvalidNavigationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ToornamentError,
    UnauthorizedError,
    ValidationError,
)
from toornament_client.errors.handler import error_for_response, raise_for_status
from toornament_client.errors.models import ErrorEnvelope, ServiceError

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "CodecError",
    "ConflictError",
    "ErrorEnvelope",
    "ForbiddenError",
    "InvalidNavigationError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "ServiceError",
    "ToornamentError",
    "UnauthorizedError",
    "ValidationError",
    "error_for_response",
    "raise_for_status",
]

"""Authentication components for the Toornament client.

This module provides:
- Immutable application credentials and their resolution (value → env → .env)
- The OAuth2 client-credential token manager with cached, single-flight refresh
- The authentication error taxonomy

Example:
    ```python
    from toornament_client.auth import Credentials

    credentials = Credentials.from_env()
    ```
"""

from toornament_client.auth.credentials import CredentialResolver, Credentials
from toornament_client.auth.exceptions import (
    AuthError,
    CredentialError,
    CredentialNotFoundError,
    InvalidCredentialsError,
    MalformedTokenResponseError,
    TokenEndpointUnreachableError,
    TokenRejectedTwiceError,
)
from toornament_client.auth.token import AccessToken, TokenManager

__all__ = [
    "AccessToken",
    "AuthError",
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "Credentials",
    "InvalidCredentialsError",
    "MalformedTokenResponseError",
    "TokenEndpointUnreachableError",
    "TokenManager",
    "TokenRejectedTwiceError",
]

"""Exceptions for credential configuration and the OAuth2 token flow.

Example:
    ```python
    from toornament_client.auth.exceptions import AuthError

    try:
        client.tournaments()
    except AuthError as e:
        print(f"Could not authenticate: {e}")
    ```
"""

from toornament_client.errors.exceptions import ClientError, ToornamentError


class CredentialError(ToornamentError):
    """Base exception for credential-related errors.

    Raised directly for malformed credentials (empty values) and used as the
    parent of the resolution errors below.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class AuthError(ToornamentError):
    """Base exception for failures to obtain or use a bearer token."""

    pass


class InvalidCredentialsError(AuthError):
    """The token endpoint refused the application credentials.

    Attributes:
        status_code: HTTP status returned by the token endpoint.
        error: OAuth2 ``error`` code, e.g. ``invalid_client``.
        error_description: Human readable description from the provider.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: str | None = None,
        error_description: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.error_description = error_description


class TokenEndpointUnreachableError(AuthError):
    """The token endpoint could not be reached or answered with a 5xx."""

    pass


class MalformedTokenResponseError(AuthError):
    """The token endpoint answered 2xx with a body that is not a token."""

    pass


class TokenRejectedTwiceError(AuthError, ClientError):
    """A resource endpoint rejected the bearer token again after a refresh.

    Carries the status code and response of the second rejection, like any
    other ``ClientError``.
    """

    pass

"""Application credentials and their resolution from the environment.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Example:
    ```python
    from toornament_client.auth import Credentials

    # Reads TOORNAMENT_API_KEY, TOORNAMENT_CLIENT_ID and
    # TOORNAMENT_CLIENT_SECRET from the environment or a .env file
    credentials = Credentials.from_env()
    ```

Security Considerations:
    - Credentials are never logged in full (masked with ***)
    - Only source information is logged (env var name, default, ...)
    - Thread-safe dotenv loading with lock
"""

import logging
import os
from dataclasses import dataclass, field
from threading import Lock

from dotenv import load_dotenv

from toornament_client.auth.exceptions import CredentialError, CredentialNotFoundError

logger = logging.getLogger(__name__)

API_KEY_ENV = "TOORNAMENT_API_KEY"
CLIENT_ID_ENV = "TOORNAMENT_CLIENT_ID"
CLIENT_SECRET_ENV = "TOORNAMENT_CLIENT_SECRET"
TIMEOUT_ENV = "TOORNAMENT_TIMEOUT"


class CredentialResolver:
    """Resolve configuration values from multiple sources with priority ordering.

    Explicitly provided values take precedence over environment variables,
    which take precedence over .env file values, which finally take
    precedence over defaults. Values from a .env file end up in
    ``os.environ`` (python-dotenv never overrides variables already set).

    Example:
        ```python
        resolver = CredentialResolver()

        api_key = resolver.resolve(env_var_name="TOORNAMENT_API_KEY", required=True)
        timeout = resolver.resolve(env_var_name="TOORNAMENT_TIMEOUT", default="30")
        ```
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories for one.
            load_dotenv: Whether to load the .env file at all. Tests usually
                pass False.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Mark as attempted either way; a broken .env must not block explicit values
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a value from the first source that has one.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Default value if not found elsewhere.
            required: If True, raises CredentialNotFoundError when nothing
                resolves.
            mask_in_logs: If True (default), masks the value in log messages.

        Returns:
            Resolved value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required=True and nothing resolves.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result


@dataclass(frozen=True)
class Credentials:
    """The three opaque strings identifying a Toornament application.

    ``api_key`` is sent as ``X-Api-Key`` on every request; ``client_id`` and
    ``client_secret`` are exchanged for bearer tokens. Values never appear in
    ``repr``.
    """

    api_key: str = field(repr=False)
    client_id: str = field(repr=False)
    client_secret: str = field(repr=False)

    def __post_init__(self):
        for name in ("api_key", "client_id", "client_secret"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise CredentialError(f"Credential '{name}' must be a non-empty string")

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        api_key: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> "Credentials":
        """Build credentials from explicit values, the environment or a .env file.

        Raises:
            CredentialNotFoundError: If any of the three values is missing.
        """
        resolver = resolver or CredentialResolver()
        return cls(
            api_key=resolver.resolve(value=api_key, env_var_name=API_KEY_ENV, required=True),
            client_id=resolver.resolve(value=client_id, env_var_name=CLIENT_ID_ENV, required=True),
            client_secret=resolver.resolve(value=client_secret, env_var_name=CLIENT_SECRET_ENV, required=True),
        )


def resolve_timeout(resolver: CredentialResolver, value: float | None, default: float | None) -> float | None:
    """Resolve the request timeout in seconds; ``0`` or ``none`` disables it."""
    if value is not None:
        return value
    raw = resolver.resolve(env_var_name=TIMEOUT_ENV, mask_in_logs=False)
    if raw is None:
        return default
    if raw.strip().lower() in ("", "0", "none"):
        return None
    try:
        return float(raw)
    except ValueError:
        raise CredentialError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from None

"""Tests for multi-source credential resolution.

This module tests the CredentialResolver class, the immutable Credentials
value built from it, and timeout resolution.
"""

import logging

import pytest

from toornament_client.auth import CredentialResolver, Credentials
from toornament_client.auth.credentials import resolve_timeout
from toornament_client.auth.exceptions import CredentialError, CredentialNotFoundError


class TestCredentialResolverInit:
    """Test CredentialResolver initialization."""

    def test_init_default(self):
        """Test default initialization."""
        resolver = CredentialResolver()
        assert resolver._dotenv_loaded  # Should load dotenv by default

    def test_init_skip_dotenv(self):
        """Test initialization with dotenv loading disabled."""
        resolver = CredentialResolver(load_dotenv=False)
        assert not resolver._dotenv_loaded

    def test_init_with_custom_dotenv_path(self, tmp_path):
        """Test initialization with custom dotenv path."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_VAR=test_value\n")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))
        assert resolver._dotenv_loaded


class TestCredentialResolverResolve:
    """Test basic credential resolution."""

    def test_resolve_from_explicit_value(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(value="explicit-value-123") == "explicit-value-123"

    def test_resolve_from_environment_variable(self, monkeypatch):
        monkeypatch.setenv("TEST_API_KEY", "env-value-456")
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_API_KEY") == "env-value-456"

    def test_resolve_from_dotenv_file(self, tmp_path, monkeypatch):
        """Values of the .env file end up in the environment and resolve from there."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_DOTENV_KEY=dotenv-value-789\n")
        monkeypatch.delenv("TEST_DOTENV_KEY", raising=False)

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))
        result = resolver.resolve(env_var_name="TEST_DOTENV_KEY")

        assert result == "dotenv-value-789"
        monkeypatch.delenv("TEST_DOTENV_KEY", raising=False)

    def test_resolve_with_default_value(self):
        resolver = CredentialResolver(load_dotenv=False)

        result = resolver.resolve(env_var_name="TEST_NONEXISTENT_VAR", default="default-value-999")

        assert result == "default-value-999"

    def test_resolve_returns_none_when_not_found(self):
        resolver = CredentialResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_NONEXISTENT_VAR") is None

    def test_resolve_raises_when_required_and_not_found(self):
        resolver = CredentialResolver(load_dotenv=False)

        with pytest.raises(CredentialNotFoundError) as exc_info:
            resolver.resolve(env_var_name="TEST_NONEXISTENT_VAR", required=True)

        assert "Required credential not found" in str(exc_info.value)
        assert exc_info.value.env_var_name == "TEST_NONEXISTENT_VAR"


class TestCredentialResolverPriority:
    """Test credential resolution priority ordering."""

    def test_explicit_value_overrides_all(self, monkeypatch):
        monkeypatch.setenv("TEST_PRIORITY_KEY", "env-value")
        resolver = CredentialResolver(load_dotenv=False)

        result = resolver.resolve(
            value="explicit-value",
            env_var_name="TEST_PRIORITY_KEY",
            default="default-value",
        )

        assert result == "explicit-value"

    def test_environment_overrides_default(self, monkeypatch):
        monkeypatch.setenv("TEST_PRIORITY_KEY2", "env-value")
        resolver = CredentialResolver(load_dotenv=False)

        result = resolver.resolve(env_var_name="TEST_PRIORITY_KEY2", default="default-value")

        assert result == "env-value"


class TestCredentialMasking:
    """Test credential masking in logs."""

    def test_credential_value_is_masked_in_debug_logs(self, caplog):
        caplog.set_level(logging.DEBUG)

        resolver = CredentialResolver(load_dotenv=False)
        resolver.resolve(value="super-secret-key-123", mask_in_logs=True)

        assert "super-secret-key-123" not in caplog.text
        assert "***" in caplog.text

    def test_credential_masking_can_be_disabled(self, caplog):
        caplog.set_level(logging.DEBUG)

        resolver = CredentialResolver(load_dotenv=False)
        resolver.resolve(value="public-value", mask_in_logs=False)

        assert "public-value" in caplog.text

    def test_credentials_repr_hides_values(self):
        credentials = Credentials(api_key="key-abc", client_id="id-def", client_secret="secret-ghi")

        text = repr(credentials)

        assert "key-abc" not in text
        assert "id-def" not in text
        assert "secret-ghi" not in text


class TestThreadSafety:
    """Test thread-safe dotenv loading."""

    def test_dotenv_loaded_only_once(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_VAR=test_value\n")

        resolver = CredentialResolver(dotenv_path=str(dotenv_file))

        resolver._ensure_dotenv_loaded()
        resolver._ensure_dotenv_loaded()

        assert resolver._dotenv_loaded is True

    def test_unreadable_dotenv_does_not_block_explicit_values(self, tmp_path):
        dotenv_path = tmp_path / "not_a_file"
        dotenv_path.mkdir()

        resolver = CredentialResolver(dotenv_path=str(dotenv_path))

        assert resolver._dotenv_loaded is True
        assert resolver.resolve(value="works") == "works"


class TestCredentials:
    """Test the immutable application credentials."""

    @pytest.mark.unit
    def test_from_env_reads_all_three_variables(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_API_KEY", "key")
        monkeypatch.setenv("TOORNAMENT_CLIENT_ID", "id")
        monkeypatch.setenv("TOORNAMENT_CLIENT_SECRET", "secret")

        credentials = Credentials.from_env(CredentialResolver(load_dotenv=False))

        assert credentials == Credentials(api_key="key", client_id="id", client_secret="secret")

    @pytest.mark.unit
    def test_from_env_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_API_KEY", "env-key")
        monkeypatch.setenv("TOORNAMENT_CLIENT_ID", "id")
        monkeypatch.setenv("TOORNAMENT_CLIENT_SECRET", "secret")

        credentials = Credentials.from_env(CredentialResolver(load_dotenv=False), api_key="explicit-key")

        assert credentials.api_key == "explicit-key"

    @pytest.mark.unit
    def test_from_env_missing_variable(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_API_KEY", "key")
        monkeypatch.setenv("TOORNAMENT_CLIENT_ID", "id")

        with pytest.raises(CredentialNotFoundError) as exc_info:
            Credentials.from_env(CredentialResolver(load_dotenv=False))

        assert exc_info.value.env_var_name == "TOORNAMENT_CLIENT_SECRET"

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["api_key", "client_id", "client_secret"])
    def test_empty_values_are_rejected(self, field):
        values = {"api_key": "key", "client_id": "id", "client_secret": "secret"}
        values[field] = "  "

        with pytest.raises(CredentialError, match=field):
            Credentials(**values)

    @pytest.mark.unit
    def test_credentials_are_immutable(self):
        credentials = Credentials(api_key="key", client_id="id", client_secret="secret")

        with pytest.raises(AttributeError):
            credentials.api_key = "other"


class TestResolveTimeout:
    """Test request timeout configuration."""

    @pytest.mark.unit
    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_TIMEOUT", "5")

        assert resolve_timeout(CredentialResolver(load_dotenv=False), 12.0, 30.0) == 12.0

    @pytest.mark.unit
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_TIMEOUT", "2.5")

        assert resolve_timeout(CredentialResolver(load_dotenv=False), None, 30.0) == 2.5

    @pytest.mark.unit
    def test_default_when_unset(self):
        assert resolve_timeout(CredentialResolver(load_dotenv=False), None, 30.0) == 30.0

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["0", "none", "None"])
    def test_disabled(self, monkeypatch, raw):
        monkeypatch.setenv("TOORNAMENT_TIMEOUT", raw)

        assert resolve_timeout(CredentialResolver(load_dotenv=False), None, 30.0) is None

    @pytest.mark.unit
    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("TOORNAMENT_TIMEOUT", "soon")

        with pytest.raises(CredentialError, match="TOORNAMENT_TIMEOUT"):
            resolve_timeout(CredentialResolver(load_dotenv=False), None, 30.0)

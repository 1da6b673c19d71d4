"""Tests for configuration loading from YAML and the environment."""

import logging
from pathlib import Path

import pytest

from gateway.config import (
    AppConfig,
    ConfigurationError,
    LogFormat,
    ServerConfig,
    UpstreamConfig,
    load_config,
    load_environment_config,
)
from gateway.config.environment import DEFAULT_BASE_URL, DEFAULT_HOST, DEFAULT_PORT
from gateway.config.validators import check_for_warnings
from tests.helpers import TEST_API_KEY


VALID_CONFIG = """\
upstream:
  timeout: 15
  user_agent: "  EventGateway/Test  "
server:
  cors_origins:
    - https://app.example.com
logging:
  level: DEBUG
  format: json
"""


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, tmp_path, mock_env_vars):
        """Test loading a complete configuration file."""
        app_config, env_config = load_config(write_config(tmp_path, VALID_CONFIG))

        assert app_config.upstream.timeout == 15
        assert app_config.upstream.user_agent == "EventGateway/Test"
        assert app_config.server.cors_origins == ["https://app.example.com"]
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"

        assert env_config.api_key == TEST_API_KEY
        assert env_config.base_url == "https://discovery.example.com/v2"
        assert env_config.port == 9090

    def test_partial_config_uses_defaults(self, tmp_path, mock_env_vars):
        """Test sections left out of the file take their defaults."""
        app_config, _ = load_config(write_config(tmp_path, "upstream:\n  timeout: 20\n"))

        assert app_config.upstream.timeout == 20
        assert app_config.upstream.user_agent == "EventGateway/1.0"
        assert app_config.server.cors_origins == ["*"]
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_empty_file_means_defaults(self, tmp_path, mock_env_vars):
        """Test an empty YAML file is accepted."""
        app_config, _ = load_config(write_config(tmp_path, ""))

        assert app_config == AppConfig()

    def test_no_config_file_means_defaults(self, tmp_path, mock_env_vars):
        """Test running without any config file."""
        mock_env_vars.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config == AppConfig()

    def test_default_location_is_discovered(self, tmp_path, mock_env_vars):
        """Test config/config.yaml is picked up from the working directory."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("upstream:\n  timeout: 42\n")
        mock_env_vars.chdir(tmp_path)

        with pytest.warns(UserWarning):
            app_config, _ = load_config()

        assert app_config.upstream.timeout == 42

    def test_explicit_file_not_found(self, tmp_path, mock_env_vars):
        """Test error when an explicitly requested file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "missing.yaml")

        assert "not found" in str(exc_info.value).lower()

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        """Test error when YAML syntax is invalid."""
        path = write_config(tmp_path, "upstream:\n  timeout: '10\n  bad")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "parse" in str(exc_info.value).lower()

    def test_top_level_must_be_mapping(self, tmp_path, mock_env_vars):
        """Test a YAML list at the top level is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(write_config(tmp_path, "- upstream\n- server\n"))

        assert "mapping" in str(exc_info.value)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    @pytest.mark.parametrize("timeout", [0, 121])
    def test_timeout_out_of_range(self, tmp_path, mock_env_vars, timeout):
        """Test the upstream timeout bounds."""
        path = write_config(tmp_path, f"upstream:\n  timeout: {timeout}\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "upstream -> timeout" in str(exc_info.value)

    def test_invalid_log_format(self, tmp_path, mock_env_vars):
        """Test an unknown log format is rejected."""
        path = write_config(tmp_path, "logging:\n  format: xml\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "logging -> format" in str(exc_info.value)

    def test_blank_user_agent(self):
        """Test a whitespace-only user agent is rejected."""
        with pytest.raises(ValueError):
            UpstreamConfig(user_agent="   ")

    def test_blank_origins_fall_back_to_any(self):
        """Test an origin list of blanks means any origin."""
        assert ServerConfig(cors_origins=["", "  "]).cors_origins == ["*"]

    def test_origins_are_stripped(self):
        """Test origins are trimmed."""
        config = ServerConfig(cors_origins=[" https://a.example.com "])

        assert config.cors_origins == ["https://a.example.com"]

    def test_error_message_lists_suggestions(self, tmp_path, mock_env_vars):
        """Test ConfigurationError renders errors and suggestions."""
        path = write_config(tmp_path, "upstream:\n  timeout: 0\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        message = str(exc_info.value)
        assert "Validation Errors:" in message
        assert "Suggestions:" in message
        assert exc_info.value.errors


class TestConfigWarnings:
    """Tests for non-fatal configuration warnings."""

    def test_long_timeout_warns(self):
        """Test a long timeout produces a warning."""
        warnings = check_for_warnings({"upstream": {"timeout": 60}})

        assert len(warnings) == 1
        assert "60s" in warnings[0]

    def test_wildcard_mixed_with_origins_warns(self):
        """Test '*' next to explicit origins produces a warning."""
        warnings = check_for_warnings({"server": {"cors_origins": ["*", "https://a.example.com"]}})

        assert len(warnings) == 1

    def test_clean_config_has_no_warnings(self):
        """Test defaults produce no warnings."""
        assert check_for_warnings({}) == []

    def test_warnings_emitted_on_load(self, tmp_path, mock_env_vars):
        """Test warnings surface as UserWarning when loading."""
        path = write_config(tmp_path, "upstream:\n  timeout: 90\n")

        with pytest.warns(UserWarning, match="Long upstream timeout"):
            load_config(path)


class TestEnvironmentConfig:
    """Tests for environment variable loading."""

    def test_defaults(self, clean_env):
        """Test defaults when only the API key is set."""
        clean_env.setenv("TM_API_KEY", "abc")

        env_config = load_environment_config()

        assert env_config.api_key == "abc"
        assert env_config.base_url == DEFAULT_BASE_URL
        assert env_config.host == DEFAULT_HOST
        assert env_config.port == DEFAULT_PORT
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_all_variables(self, mock_env_vars):
        """Test every variable is read."""
        mock_env_vars.setenv("HOST", "0.0.0.0")
        mock_env_vars.setenv("LOG_LEVEL", "debug")
        mock_env_vars.setenv("ENVIRONMENT", "staging")
        mock_env_vars.setenv("TM_BASE_URL", "https://discovery.example.com/v2/")

        env_config = load_environment_config()

        assert env_config.host == "0.0.0.0"
        assert env_config.log_level == "DEBUG"
        assert env_config.environment == "staging"
        assert env_config.base_url == "https://discovery.example.com/v2"

    def test_missing_api_key_only_warns(self, clean_env, caplog):
        """Test a missing API key does not stop startup."""
        with caplog.at_level(logging.WARNING, logger="gateway.config.environment"):
            env_config = load_environment_config()

        assert env_config.api_key == ""
        assert any("TM_API_KEY" in record.getMessage() for record in caplog.records)

    @pytest.mark.parametrize("port", ["invalid", "0", "70000"])
    def test_invalid_port(self, mock_env_vars, port):
        """Test invalid PORT values are rejected."""
        mock_env_vars.setenv("PORT", port)

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "PORT" in str(exc_info.value)

    def test_invalid_base_url(self, mock_env_vars):
        """Test a non-http base URL is rejected."""
        mock_env_vars.setenv("TM_BASE_URL", "discovery.example.com")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "TM_BASE_URL" in str(exc_info.value)

    def test_invalid_log_level(self, mock_env_vars):
        """Test an unknown LOG_LEVEL is rejected."""
        mock_env_vars.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            load_environment_config()

    def test_errors_are_collected(self, mock_env_vars):
        """Test every invalid variable is reported at once."""
        mock_env_vars.setenv("PORT", "abc")
        mock_env_vars.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2


def test_log_format_values():
    """Test the accepted log format names."""
    assert {f.value for f in LogFormat} == {"json", "key-value"}

"""
Unit tests for configuration management.

Tests configuration loading, environment expansion and validation.
"""

import pytest

from serval.config.settings import (
    AdapterConfig,
    LoggingConfig,
    ServalConfig,
    _expand_env_vars,
    _validate_config,
    get_default_config,
    get_default_config_path,
    load_config,
)
from serval.exceptions import InvalidConfigurationError


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""

    def test_adapter_config_defaults(self):
        config = AdapterConfig()
        assert config.host == ""
        assert config.base_url == ""
        assert config.namespace == ""
        assert config.headers == {}
        assert config.timeout_s is None

    def test_logging_config_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file == ""
        assert config.format == "console"

    def test_default_config(self):
        config = get_default_config()
        assert isinstance(config, ServalConfig)
        assert config.adapter == AdapterConfig()

    def test_default_config_path(self):
        assert get_default_config_path().endswith(".serval/config.yaml")


class TestLoadConfig:
    """Test loading configuration from YAML files."""

    def test_missing_file_returns_defaults(self, temp_dir):
        config = load_config(str(temp_dir / "absent.yaml"))
        assert config == get_default_config()

    def test_empty_file_returns_defaults(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == get_default_config()

    def test_full_file(self, sample_config_path):
        config = load_config(str(sample_config_path))
        assert config.adapter.host == "https://surveys.test/api/v1"
        assert config.adapter.namespace == "/admin"
        assert config.adapter.headers == {"authorization": "Bearer test-token"}
        assert config.adapter.timeout_s == 5.0
        assert config.logging.level == "DEBUG"

    def test_env_var_expansion(self, temp_dir, monkeypatch):
        monkeypatch.setenv("SERVAL_TEST_HOST", "https://env.test/api/v1")
        monkeypatch.delenv("SERVAL_TEST_TOKEN", raising=False)
        path = temp_dir / "config.yaml"
        path.write_text(
            "adapter:\n"
            "  host: ${SERVAL_TEST_HOST}\n"
            "  headers:\n"
            "    authorization: Bearer ${SERVAL_TEST_TOKEN:anonymous}\n"
        )

        config = load_config(str(path))

        assert config.adapter.host == "https://env.test/api/v1"
        assert config.adapter.headers["authorization"] == "Bearer anonymous"

    def test_malformed_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("adapter: [unclosed\n")
        with pytest.raises(InvalidConfigurationError, match="Failed to parse YAML"):
            load_config(str(path))

    def test_top_level_must_be_mapping(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InvalidConfigurationError, match="mapping"):
            load_config(str(path))

    def test_unknown_key(self, temp_dir):
        path = temp_dir / "unknown.yaml"
        path.write_text("adapter:\n  hostname: https://x\n")
        with pytest.raises(InvalidConfigurationError, match="Invalid configuration"):
            load_config(str(path))

    def test_non_numeric_timeout(self, temp_dir):
        path = temp_dir / "timeout.yaml"
        path.write_text("adapter:\n  timeout_s: soon\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))


class TestValidateConfig:
    def test_valid_defaults(self):
        _validate_config(get_default_config())

    def test_headers_must_be_strings(self):
        config = ServalConfig(adapter=AdapterConfig(headers={"x-retry": 3}))
        with pytest.raises(InvalidConfigurationError, match="headers entries"):
            _validate_config(config)

    def test_headers_must_be_mapping(self):
        config = ServalConfig(adapter=AdapterConfig(headers=["x-a"]))
        with pytest.raises(InvalidConfigurationError, match="must be a mapping"):
            _validate_config(config)

    def test_host_must_be_string(self):
        config = ServalConfig(adapter=AdapterConfig(host=42))
        with pytest.raises(InvalidConfigurationError, match="adapter.host"):
            _validate_config(config)

    def test_timeout_must_be_positive(self):
        config = ServalConfig(adapter=AdapterConfig(timeout_s=0))
        with pytest.raises(InvalidConfigurationError, match="timeout_s"):
            _validate_config(config)

    def test_log_level(self):
        config = ServalConfig(logging=LoggingConfig(level="LOUD"))
        with pytest.raises(InvalidConfigurationError, match="logging level"):
            _validate_config(config)

    def test_log_format(self):
        config = ServalConfig(logging=LoggingConfig(format="xml"))
        with pytest.raises(InvalidConfigurationError, match="logging format"):
            _validate_config(config)


class TestExpandEnvVars:
    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("SERVAL_NS", "/admin")
        value = {"a": ["${SERVAL_NS}", 1], "b": {"c": "x${SERVAL_NS}"}}
        assert _expand_env_vars(value) == {"a": ["/admin", 1], "b": {"c": "x/admin"}}

    def test_missing_without_default(self, monkeypatch):
        monkeypatch.delenv("SERVAL_UNSET", raising=False)
        assert _expand_env_vars("${SERVAL_UNSET}") == ""

"""Unit tests for dynconfig/adaptors/envconfig.py."""

import dataclasses

import pytest

from dynconfig import (
    ConfigTypeError,
    EnvConfigAdaptor,
    MalformedSourceError,
    MissingRequiredError,
    env_field,
)
from tests.fixtures import AppConfig, Config


class TestEnvConfigAdaptor:
    """Test environment binding with prefix and defaults."""

    def test_no_variables_applies_defaults(self):
        config = Config()
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config == Config(host="127.0.0.1", port=80)

    def test_non_zero_value_is_preserved(self):
        config = Config(port=5050)
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config == Config(host="127.0.0.1", port=5050)

    def test_variable_overrides(self, monkeypatch):
        monkeypatch.setenv("HOTRELOAD_PORT", "5050")
        config = Config()
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config == Config(host="127.0.0.1", port=5050)

    def test_variable_overrides_non_zero_value(self, monkeypatch):
        monkeypatch.setenv("HOTRELOAD_HOST", "10.0.0.1")
        config = Config(host="192.168.1.1")
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config.host == "10.0.0.1"

    def test_unprefixed_tag_is_used_as_fallback(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        config = Config()
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config.port == 9000

    def test_prefixed_name_wins_over_fallback(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("HOTRELOAD_PORT", "9001")
        config = Config()
        EnvConfigAdaptor("HOTRELOAD").read(config)
        assert config.port == 9001

    def test_lowercase_prefix_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("MY_APP_PORT", "5050")
        config = Config()
        EnvConfigAdaptor("my_app").read(config)
        assert config == Config(host="127.0.0.1", port=5050)

    def test_lowercase_tag_fallback_is_uppercased(self, monkeypatch):
        @dataclasses.dataclass
        class Tagged:
            level: str = env_field("app_level")

        monkeypatch.setenv("APP_LEVEL", "info")
        config = Tagged()
        EnvConfigAdaptor("other").read(config)
        assert config.level == "info"

    def test_malformed_value_raises(self, monkeypatch):
        monkeypatch.setenv("HOTRELOAD_PORT", "eighty")
        with pytest.raises(MalformedSourceError, match="HOTRELOAD_PORT"):
            EnvConfigAdaptor("HOTRELOAD").read(Config())

    def test_custom_environ_mapping(self):
        config = Config()
        EnvConfigAdaptor("SVC", environ={"SVC_HOST": "example.org"}).read(config)
        assert config == Config(host="example.org", port=80)

    def test_rejects_non_dataclass(self):
        with pytest.raises(ConfigTypeError):
            EnvConfigAdaptor("HOTRELOAD").read({"host": "x"})

    def test_is_idempotent(self, monkeypatch):
        monkeypatch.setenv("HOTRELOAD_PORT", "5050")
        adaptor = EnvConfigAdaptor("HOTRELOAD")
        config = Config()
        adaptor.read(config)
        first = Config(**vars(config))
        adaptor.read(config)
        assert config == first


class TestEnvConfigTypes:
    """Test typed, nested and required fields."""

    def test_required_field_missing_raises(self):
        with pytest.raises(MissingRequiredError, match="APP_TOKEN"):
            EnvConfigAdaptor("APP").read(AppConfig())

    def test_required_field_already_set_is_accepted(self):
        config = AppConfig(token="preset")
        EnvConfigAdaptor("APP").read(config)
        assert config.token == "preset"

    def test_typed_fields(self, monkeypatch):
        monkeypatch.setenv("APP_TOKEN", "secret")
        monkeypatch.setenv("APP_DEBUG", "true")
        monkeypatch.setenv("APP_RATIO", "0.75")
        monkeypatch.setenv("APP_TAGS", "x, y")
        monkeypatch.setenv("APP_LABELS", "env:prod,team:core")
        config = AppConfig()
        EnvConfigAdaptor("APP").read(config)
        assert config.token == "secret"
        assert config.debug is True
        assert config.ratio == 0.75
        assert config.tags == ["x", "y"]
        assert config.labels == {"env": "prod", "team": "core"}

    def test_typed_defaults(self, monkeypatch):
        monkeypatch.setenv("APP_TOKEN", "secret")
        config = AppConfig()
        EnvConfigAdaptor("APP").read(config)
        assert config.name == "app"
        assert config.debug is False
        assert config.ratio == 0.5
        assert config.tags == ["a", "b"]
        assert config.labels == {}

    def test_default_list_is_copied(self, monkeypatch):
        monkeypatch.setenv("APP_TOKEN", "secret")
        first, second = AppConfig(), AppConfig()
        adaptor = EnvConfigAdaptor("APP")
        adaptor.read(first)
        adaptor.read(second)
        first.tags.append("c")
        assert second.tags == ["a", "b"]

    def test_nested_dataclass_uses_field_prefix(self, monkeypatch):
        monkeypatch.setenv("APP_TOKEN", "secret")
        monkeypatch.setenv("APP_DATABASE_URL", "postgres://db/app")
        monkeypatch.setenv("APP_DATABASE_POOL_SIZE", "20")
        config = AppConfig()
        EnvConfigAdaptor("APP").read(config)
        assert config.database.url == "postgres://db/app"
        assert config.database.pool_size == 20

    def test_nested_dataclass_defaults(self, monkeypatch):
        monkeypatch.setenv("APP_TOKEN", "secret")
        config = AppConfig()
        EnvConfigAdaptor("APP").read(config)
        assert config.database.url == "sqlite:///app.db"
        assert config.database.pool_size == 5

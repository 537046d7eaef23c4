"""Tests for config manager."""

import pytest

from fluentbit_monitor.client.errors import ConfigurationError
from fluentbit_monitor.config.manager import ConfigManager
from fluentbit_monitor.config.models import AgentProfile


class TestConfigManager:
    def test_load_empty(self, config_manager: ConfigManager):
        assert config_manager.config.profiles == {}
        assert config_manager.config.default_profile is None

    def test_add_profile(self, config_manager: ConfigManager, sample_profile: AgentProfile):
        config_manager.add_profile(sample_profile)
        assert "test-agent" in config_manager.config.profiles
        assert config_manager.config.default_profile == "test-agent"

    def test_add_sets_first_as_default(self, config_manager: ConfigManager):
        config_manager.add_profile(AgentProfile(name="first", url="http://first:2020"))
        config_manager.add_profile(AgentProfile(name="second", url="http://second:2020"))
        assert config_manager.config.default_profile == "first"

    def test_remove_profile(self, config_manager: ConfigManager, sample_profile: AgentProfile):
        config_manager.add_profile(sample_profile)
        assert config_manager.remove_profile("test-agent") is True
        assert "test-agent" not in config_manager.config.profiles

    def test_remove_nonexistent(self, config_manager: ConfigManager):
        assert config_manager.remove_profile("nope") is False

    def test_remove_default_reassigns(self, config_manager: ConfigManager):
        config_manager.add_profile(AgentProfile(name="a", url="http://a:2020"))
        config_manager.add_profile(AgentProfile(name="b", url="http://b:2020"))
        config_manager.set_default("a")
        config_manager.remove_profile("a")
        assert config_manager.config.default_profile == "b"

    def test_set_default_nonexistent(self, config_manager: ConfigManager):
        assert config_manager.set_default("nope") is False

    def test_save_and_reload(self, config_manager: ConfigManager):
        config_manager.add_profile(
            AgentProfile(name="slow", url="http://slow:2020", retry_timeout=10.0)
        )
        mgr2 = ConfigManager(config_path=config_manager.config_path)
        p = mgr2.get_profile("slow")
        assert p is not None
        assert p.url == "http://slow:2020"
        assert p.retry_timeout == 10.0
        assert p.poll_interval == 0.15

    def test_defaults_not_written(self, config_manager: ConfigManager, sample_profile: AgentProfile):
        config_manager.add_profile(sample_profile)
        text = config_manager.config_path.read_text()
        assert "url" in text
        assert "retry_timeout" not in text
        assert "poll_interval" not in text

    def test_invalid_toml(self, tmp_config):
        tmp_config.write_text("profiles = [")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            ConfigManager(config_path=tmp_config).config

    def test_resolve_from_profile(self, config_manager: ConfigManager, sample_profile: AgentProfile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_agent()
        assert resolved.name == "test-agent"
        assert resolved.url == "http://localhost:2020"

    def test_resolve_cli_overrides(self, config_manager: ConfigManager, sample_profile: AgentProfile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_agent(url="http://other:2020", retry_timeout=9.0)
        assert resolved.url == "http://other:2020"
        assert resolved.retry_timeout == 9.0

    def test_resolve_env_url(self, config_manager: ConfigManager, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FLUENTBIT_MONITOR_URL", "http://env-agent:2020")
        resolved = config_manager.resolve_agent()
        assert resolved.url == "http://env-agent:2020"
        assert resolved.name == "cli"

    def test_resolve_env_profile(self, config_manager: ConfigManager, monkeypatch: pytest.MonkeyPatch):
        config_manager.add_profile(AgentProfile(name="a", url="http://a:2020"))
        config_manager.add_profile(AgentProfile(name="b", url="http://b:2020"))
        monkeypatch.setenv("FLUENTBIT_MONITOR_PROFILE", "b")
        assert config_manager.resolve_agent().url == "http://b:2020"

    def test_resolve_unknown_profile(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="not found"):
            config_manager.resolve_agent(profile_name="ghost")

    def test_resolve_no_url_raises(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="No agent URL configured"):
            config_manager.resolve_agent()
